import pytest

from ahoydtu.alarms import alarm_text
from ahoydtu.mi_status import STATUS_REGULAR, mi_data_channel, mi_status_code


@pytest.mark.parametrize("u_state", [0, 1, 3])
def test_regular_states(u_state):
    assert mi_status_code(u_state, 0, 1) == STATUS_REGULAR
    assert mi_status_code(u_state, 9, 2, 4, 5) == STATUS_REGULAR


@pytest.mark.parametrize(
    "channel,text",
    [
        (1, "PV Input 1 Overvoltage/Undervoltage"),
        (2, "PV Input 2 Overvoltage/Undervoltage"),
        (3, "PV Input 3 Overvoltage/Undervoltage"),
        (4, "PV Input 4 Overvoltage/Undervoltage"),
    ],
)
def test_state_two_maps_to_pv_input_alarm(channel, text):
    assert alarm_text(mi_status_code(2, 0, channel)) == text


def test_state_two_lower_state_adds_tens():
    base = mi_status_code(2, 0, 1)
    assert mi_status_code(2, 0, 1, 3) == base + 30
    assert mi_status_code(2, 7, 1) == base


@pytest.mark.parametrize("channel", [1, 2, 3, 4])
def test_port_error_includes_channel(channel):
    assert alarm_text(mi_status_code(5, 4, channel)) == f"Error code-04 Port {channel}"


@pytest.mark.parametrize("channel", [0, 1, 2, 4])
def test_channel_ignored_from_enum_six(channel):
    assert alarm_text(mi_status_code(5, 7, channel)) == "Over temperature protection"
    assert alarm_text(mi_status_code(5, 10, channel)) == "Island detected"
    assert alarm_text(mi_status_code(5, 15, channel)) == "10 min value grid overvoltage"


def test_unspecific_shut_down_becomes_8310():
    assert mi_status_code(8, 0, 0) == 8310
    assert alarm_text(mi_status_code(8, 0, 0)) == "Shut down"


def test_lower_enum_is_added():
    assert mi_status_code(5, 8, 0, 0, 2) == mi_status_code(5, 8, 0) + 2


def test_result_fits_sixteen_bits():
    for u_state in (4, 100, 255):
        for u_enum in (0, 5, 255):
            code = mi_status_code(u_state, u_enum, 4, 255, 255)
            assert 0 <= code <= 0xFFFF


@pytest.mark.parametrize(
    "packet_id,channel",
    [(0x89, 1), (0xB6, 1), (0x91, 2), (0xB7, 2), (0xB8, 3), (0xB9, 4)],
)
def test_data_channel(packet_id, channel):
    assert mi_data_channel(packet_id) == channel


def test_unknown_packet_id_is_fourth_channel():
    assert mi_data_channel(0x00) == 4
    assert mi_data_channel(0x95) == 4