"""Status codes and channel mapping for MI series inverter messages."""

from __future__ import annotations

from .defines import CH1, CH2, CH3, CH4
from .radio import ALL_FRAMES

STATUS_REGULAR = 3
"""Status value of a channel that reports normal operation."""

_SHUT_DOWN = 8310
_UNSPECIFIC_SHUT_DOWN = 8000

_CHANNEL_BY_PACKET_ID = {
    0x09 + ALL_FRAMES: CH1,
    0x36 + ALL_FRAMES: CH1,
    0x11 + ALL_FRAMES: CH2,
    0x37 + ALL_FRAMES: CH2,
    0x38 + ALL_FRAMES: CH3,
}


def mi_status_code(
    u_state: int,
    u_enum: int,
    channel: int,
    l_state: int = 0,
    l_enum: int = 0,
) -> int:
    """Combine the state bytes of an MI status message into an alarm code.

    Returns ``STATUS_REGULAR`` for a channel in normal operation; any other
    value is a code understood by :func:`ahoydtu.alarms.alarm_text`.
    """
    status = STATUS_REGULAR
    if u_state == 2:
        status = 5050 + channel
        if l_state:
            status += l_state * 10
    elif u_state > 3:
        status = u_state * 1000 + u_enum * 10
        if l_state:
            status += l_state * 100
        status += l_enum
        if u_enum < 6:
            status += channel
        status &= 0xFFFF
        if status == _UNSPECIFIC_SHUT_DOWN:
            status = _SHUT_DOWN
    return status & 0xFFFF


def mi_data_channel(packet_id: int) -> int:
    """Return the PV channel that an MI data response with ``packet_id`` belongs to."""
    return _CHANNEL_BY_PACKET_ID.get(packet_id, CH4)