import pytest

from ahoydtu.alarms import AlarmEntry, alarm_text, iter_alarm_log, parse_alarm_log
from ahoydtu.defines import ALARM_LOG_ENTRY_SIZE


def _entry(flags, code, start, end):
    return bytes([flags, code, 0, 0, start >> 8, start & 0xFF, end >> 8, end & 0xFF, 0, 0, 0, 0])


@pytest.mark.parametrize(
    "code, text",
    [
        (1, "Inverter start"),
        (130, "Offline"),
        (307, "Hardware error code 307"),
        (8310, "Shut down"),
        (9000, "Microinverter is suspected of being stolen"),
        (4242, "Unknown"),
    ],
)
def test_alarm_text(code, text):
    assert alarm_text(code) == text


def test_parse_single_entry():
    payload = b"\x00\x00" + _entry(0x00, 141, 3600, 3700)
    entry = parse_alarm_log(0, payload)
    assert entry == AlarmEntry(code=141, start=3600, end=3700)
    assert entry.text == "Grid overvoltage"


def test_parse_pm_flags():
    payload = b"\x00\x00" + _entry(0x30, 2, 100, 200)
    entry = parse_alarm_log(0, payload)
    assert entry.start == 100 + 12 * 60 * 60
    assert entry.end == 200 + 12 * 60 * 60
    only_start = parse_alarm_log(0, b"\x00\x00" + _entry(0x20, 2, 100, 200))
    assert only_start.end == 200


def test_parse_out_of_range():
    payload = b"\x00\x00" + _entry(0, 1, 0, 0)
    assert parse_alarm_log(1, payload) is None
    assert parse_alarm_log(0, payload[:-1]) is None
    assert len(payload) == 2 + ALARM_LOG_ENTRY_SIZE


def test_iter_stops_at_zero_code_and_end():
    payload = b"\x00\x00" + _entry(0, 1, 10, 20) + _entry(0, 2, 30, 40) + _entry(0, 0, 0, 0) + _entry(0, 3, 0, 0)
    codes = [e.code for e in iter_alarm_log(payload)]
    assert codes == [1, 2]
    full = b"\x00\x00" + _entry(0, 5, 1, 2) + _entry(0, 6, 3, 4)
    assert [e.code for e in iter_alarm_log(full)] == [5, 6]
    assert list(iter_alarm_log(b"\x00\x00")) == []