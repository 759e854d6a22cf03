"""Frame building and reception bookkeeping for the 2.4 GHz inverter link."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .defines import DevControlCommand, InfoCommand

logger = logging.getLogger(__name__)

RF_CHANNELS = (3, 23, 40, 61, 75)

TX_REQ_INFO = 0x15
TX_REQ_DEVCONTROL = 0x51
ALL_FRAMES = 0x80
SINGLE_FRAME = 0x81

MAX_RF_PAYLOAD_SIZE = 32

RF24_AMP_POWER_NAMES = ("MIN", "LOW", "HIGH", "MAX")

_DEFAULT_DTU_SERIAL = 0x87654321
_MI_INFO_RESPONSE = 0x0F + ALL_FRAMES
_MI_STATUS_IDS = (0x88, 0x92)

TransmitCallback = Callable[[int, int, bytes], None]


def _crc8(data: bytes, init: int = 0x00) -> int:
    """CRC-8 with polynomial 0x01, MSB first."""
    crc = init
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = ((crc << 1) ^ (0x01 if crc & 0x80 else 0x00)) & 0xFF
    return crc


def _crc16(data: bytes, init: int = 0xFFFF) -> int:
    """CRC-16/MODBUS (reflected polynomial 0xA001), chainable via ``init``."""
    crc = init
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 0x01 else crc >> 1
    return crc & 0xFFFF


def dtu_radio_id(chip_id: int) -> int:
    """Derive the DTU radio address from the chip id of the host.

    The DTU serial is 0x8 followed by the last seven decimal digits of the
    chip id; a chip id of 0 falls back to a fixed serial.
    """
    dtu_sn = _DEFAULT_DTU_SERIAL
    if chip_id:
        dtu_sn = 0x80000000
        for shift in range(0, 28, 4):
            dtu_sn |= (chip_id % 10) << shift
            chip_id //= 10
    swapped = int.from_bytes(dtu_sn.to_bytes(4, "big"), "little")
    return (swapped << 8) | 0x01


@dataclass(frozen=True)
class Packet:
    """A frame received on a radio channel."""

    ch: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]


class HmRadio:
    """Builds request frames, tracks channel hopping and collects answers.

    Finished frames are handed to ``transmit(channel, inv_id, frame)``.
    """

    def __init__(self, chip_id: int = 0, transmit: TransmitCallback | None = None) -> None:
        self.dtu_radio_id = dtu_radio_id(chip_id)
        self.transmit = transmit
        self.tx_ch_idx = 2
        self.rx_ch_idx = 0
        self.send_cnt = 0
        self.retransmits = 0
        self.serial_debug = False
        self.received: deque[Packet] = deque()
        self.last_frame = b""
        self._tx_buf = bytearray(MAX_RF_PAYLOAD_SIZE)

    @property
    def tx_channel(self) -> int:
        return RF_CHANNELS[self.tx_ch_idx]

    @property
    def rx_channel(self) -> int:
        return RF_CHANNELS[self.rx_ch_idx]

    def send_control_packet(
        self,
        inv_id: int,
        cmd: int,
        power_limit,
        is_retransmit: bool,
        is_no_mi: bool = True,
    ) -> None:
        """Send a device control command, with power limit data where it applies."""
        logger.info("sendControlPacket cmd: 0x%02x", cmd)
        self._init_packet(inv_id, TX_REQ_DEVCONTROL, SINGLE_FRAME)
        buf = self._tx_buf
        if is_no_mi:
            buf[10] = cmd & 0xFF
            buf[11] = 0x00
            cnt = 12
            if DevControlCommand.ACTIVE_POWER_CONTR <= cmd <= DevControlCommand.PF_SET:
                limit = power_limit[0] * 10
                buf[12] = (limit >> 8) & 0xFF
                buf[13] = limit & 0xFF
                buf[14] = (power_limit[1] >> 8) & 0xFF
                buf[15] = power_limit[1] & 0xFF
                cnt = 16
        else:
            if cmd == DevControlCommand.TURN_ON:
                buf[9], buf[10] = 0x55, 0xAA
                cnt = 11
            elif cmd == DevControlCommand.TURN_OFF:
                buf[9], buf[10] = 0xAA, 0x55
                cnt = 11
            elif cmd == DevControlCommand.ACTIVE_POWER_CONTR:
                buf[9], buf[10] = 0x5A, 0x5A
                buf[11] = power_limit[0] & 0xFF
                cnt = 12
            else:
                return
        self._send_packet(inv_id, cnt, is_retransmit, is_no_mi)

    def prepare_dev_inform_cmd(
        self,
        inv_id: int,
        cmd: int,
        ts: int,
        alarm_mes_id: int,
        is_retransmit: bool,
        reqfld: int = TX_REQ_INFO,
    ) -> None:
        """Send an information request carrying the current time."""
        if self.serial_debug:
            logger.debug("prepareDevInformCmd 0x%02x", cmd)
        self._init_packet(inv_id, reqfld, ALL_FRAMES)
        buf = self._tx_buf
        buf[10] = cmd & 0xFF
        buf[11] = 0x00
        buf[12:16] = (ts & 0xFFFFFFFF).to_bytes(4, "big")
        if cmd in (InfoCommand.REAL_TIME_RUN_DATA_DEBUG, InfoCommand.ALARM_DATA):
            buf[18] = (alarm_mes_id >> 8) & 0xFF
            buf[19] = alarm_mes_id & 0xFF
        self._send_packet(inv_id, 24, is_retransmit, True)

    def send_cmd_packet(
        self,
        inv_id: int,
        mid: int,
        pid: int,
        is_retransmit: bool,
        append_crc16: bool = True,
    ) -> None:
        """Send a bare header frame with message id ``mid`` and packet id ``pid``."""
        self._init_packet(inv_id, mid, pid)
        self._send_packet(inv_id, 10, is_retransmit, append_crc16)

    def receive(self, packets: Iterable) -> bool:
        """Queue received frames; return True once the last frame of an answer arrived."""
        is_last = False
        for raw in packets:
            data = bytes(raw.data if isinstance(raw, Packet) else raw)
            if not data or data[0] == 0x00:
                continue
            packet = Packet(ch=self.rx_channel, data=data)
            self.received.append(packet)
            first = data[0]
            if first == TX_REQ_INFO + ALL_FRAMES:
                is_last = len(data) > 9 and data[9] > ALL_FRAMES
            elif first == _MI_INFO_RESPONSE:
                is_last = len(data) > 9 and data[9] > 0x10
            elif first not in _MI_STATUS_IDS:
                is_last = True
        return is_last

    def dump_buf(self, buf: bytes) -> str:
        """Return the bytes as space separated hex and log them."""
        text = " ".join(f"{b:02x}" for b in buf)
        logger.info("%s", text)
        return text

    def _init_packet(self, inv_id: int, mid: int, pid: int) -> None:
        if self.serial_debug:
            logger.debug("initPacket, mid: %02x pid: %02x", mid, pid)
        buf = self._tx_buf
        buf[:] = bytes(MAX_RF_PAYLOAD_SIZE)
        buf[0] = mid & 0xFF
        buf[1:5] = ((inv_id >> 8) & 0xFFFFFFFF).to_bytes(4, "little")
        buf[5:9] = ((self.dtu_radio_id >> 8) & 0xFFFFFFFF).to_bytes(4, "little")
        buf[9] = pid & 0xFF

    def _send_packet(self, inv_id: int, length: int, is_retransmit: bool, append_crc16: bool) -> None:
        buf = self._tx_buf
        if append_crc16 and length > 10:
            crc = _crc16(bytes(buf[10:length]))
            buf[length] = (crc >> 8) & 0xFF
            buf[length + 1] = crc & 0xFF
            length += 2
        buf[length] = _crc8(bytes(buf[:length]))
        length += 1

        self.tx_ch_idx = (self.tx_ch_idx + 1) % len(RF_CHANNELS)
        self.rx_ch_idx = (self.tx_ch_idx + 2) % len(RF_CHANNELS)

        frame = bytes(buf[:length])
        self.last_frame = frame
        if self.serial_debug:
            logger.info("TX %dB Ch%d | %s", length, self.tx_channel, self.dump_buf(frame))
        if self.transmit is not None:
            self.transmit(self.tx_channel, inv_id, frame)

        if is_retransmit:
            self.retransmits += 1
        else:
            self.send_cnt += 1