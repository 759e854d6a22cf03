"""Alarm code texts and alarm log parsing."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .defines import ALARM_LOG_ENTRY_SIZE

_HALF_DAY = 12 * 60 * 60

_ALARM_TEXTS = {
    1: "Inverter start",
    2: "DTU command failed",
    121: "Over temperature protection",
    125: "Grid configuration parameter error",
    126: "Software error code 126",
    127: "Firmware error",
    128: "Software error code 128",
    129: "Software error code 129",
    130: "Offline",
    141: "Grid overvoltage",
    142: "Average grid overvoltage",
    143: "Grid undervoltage",
    144: "Grid overfrequency",
    145: "Grid underfrequency",
    146: "Rapid grid frequency change",
    147: "Power grid outage",
    148: "Grid disconnection",
    149: "Island detected",
    205: "Input port 1 & 2 overvoltage",
    206: "Input port 3 & 4 overvoltage",
    207: "Input port 1 & 2 undervoltage",
    208: "Input port 3 & 4 undervoltage",
    209: "Port 1 no input",
    210: "Port 2 no input",
    211: "Port 3 no input",
    212: "Port 4 no input",
    213: "PV-1 & PV-2 abnormal wiring",
    214: "PV-3 & PV-4 abnormal wiring",
    215: "PV-1 Input overvoltage",
    216: "PV-1 Input undervoltage",
    217: "PV-2 Input overvoltage",
    218: "PV-2 Input undervoltage",
    219: "PV-3 Input overvoltage",
    220: "PV-3 Input undervoltage",
    221: "PV-4 Input overvoltage",
    222: "PV-4 Input undervoltage",
    **{code: f"Hardware error code {code}" for code in range(301, 315)},
    5041: "Error code-04 Port 1",
    5042: "Error code-04 Port 2",
    5043: "Error code-04 Port 3",
    5044: "Error code-04 Port 4",
    5051: "PV Input 1 Overvoltage/Undervoltage",
    5052: "PV Input 2 Overvoltage/Undervoltage",
    5053: "PV Input 3 Overvoltage/Undervoltage",
    5054: "PV Input 4 Overvoltage/Undervoltage",
    5060: "Abnormal bias",
    5070: "Over temperature protection",
    5080: "Grid Overvoltage/Undervoltage",
    5090: "Grid Overfrequency/Underfrequency",
    5100: "Island detected",
    5120: "EEPROM reading and writing error",
    5150: "10 min value grid overvoltage",
    5200: "Firmware error",
    8310: "Shut down",
    9000: "Microinverter is suspected of being stolen",
}


def alarm_text(code: int) -> str:
    """Return the description of an alarm code, or "Unknown"."""
    return _ALARM_TEXTS.get(code, "Unknown")


@dataclass(frozen=True)
class AlarmEntry:
    """One alarm log entry; times are seconds since midnight."""

    code: int
    start: int
    end: int

    @property
    def text(self) -> str:
        return alarm_text(self.code)


def parse_alarm_log(index: int, payload: bytes) -> AlarmEntry | None:
    """Decode entry ``index`` of an alarm log payload, or None if it is beyond the end."""
    offset = 2 + index * ALARM_LOG_ENTRY_SIZE
    if offset + ALARM_LOG_ENTRY_SIZE > len(payload):
        return None
    flags = payload[offset]
    start = (payload[offset + 4] << 8) | payload[offset + 5]
    end = (payload[offset + 6] << 8) | payload[offset + 7]
    if flags & 0x20:
        start += _HALF_DAY
    if flags & 0x10:
        end += _HALF_DAY
    return AlarmEntry(code=payload[offset + 1], start=start, end=end)


def iter_alarm_log(payload: bytes) -> Iterator[AlarmEntry]:
    """Yield alarm entries until the payload ends or an entry has code 0."""
    index = 0
    while True:
        entry = parse_alarm_log(index, payload)
        if entry is None or entry.code == 0:
            return
        yield entry
        index += 1