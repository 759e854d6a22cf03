"""Field, unit and byte-assignment tables for HM series inverters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Unit(IntEnum):
    """Physical unit of a measured value."""

    V = 0
    A = 1
    W = 2
    WH = 3
    KWH = 4
    HZ = 5
    C = 6
    PCT = 7
    VAR = 8
    NONE = 9


_UNIT_NAMES = ("V", "A", "W", "Wh", "kWh", "Hz", "°C", "%", "var", "")


class Field(IntEnum):
    """Kind of value carried in a record."""

    UDC = 0
    IDC = 1
    PDC = 2
    YD = 3
    YW = 4
    YT = 5
    UAC = 6
    IAC = 7
    PAC = 8
    F = 9
    T = 10
    PF = 11
    EFF = 12
    IRR = 13
    Q = 14
    EVT = 15
    FW_VERSION = 16
    FW_BUILD_YEAR = 17
    FW_BUILD_MONTH_DAY = 18
    FW_BUILD_HOUR_MINUTE = 19
    HW_ID = 20
    ACT_ACTIVE_PWR_LIMIT = 21
    LAST_ALARM_CODE = 22


_FIELD_NAMES = (
    "U_DC", "I_DC", "P_DC", "YieldDay", "YieldWeek", "YieldTotal",
    "U_AC", "I_AC", "P_AC", "F_AC", "Temp", "PF_AC", "Efficiency", "Irradiation", "Q_AC",
    "ALARM_MES_ID", "FWVersion", "FWBuildYear", "FWBuildMonthDay", "FWBuildHourMinute",
    "HWPartId", "active_PowerLimit", "LastAlarmCode",
)

NOT_AVAILABLE = "n/a"

FIELD_UNITS = (
    Unit.V, Unit.A, Unit.W, Unit.WH, Unit.KWH, Unit.KWH,
    Unit.V, Unit.A, Unit.W, Unit.HZ, Unit.C, Unit.NONE, Unit.PCT, Unit.PCT, Unit.VAR,
    Unit.NONE, Unit.NONE, Unit.NONE, Unit.NONE, Unit.NONE, Unit.NONE, Unit.PCT, Unit.NONE,
)


class DeviceClass(IntEnum):
    """Device class used for MQTT discovery."""

    NONE = 0
    CURRENT = 1
    ENERGY = 2
    POWER = 3
    VOLTAGE = 4
    FREQUENCY = 5
    TEMPERATURE = 6

    @property
    def label(self) -> str | None:
        return None if self is DeviceClass.NONE else self.name.lower()


class StateClass(IntEnum):
    """State class used for MQTT discovery."""

    NONE = 0
    MEASUREMENT = 1
    TOTAL_INCREASING = 2

    @property
    def label(self) -> str | None:
        return None if self is StateClass.NONE else self.name.lower()


_DISCOVERY_CLASSES = {
    Field.UDC: (DeviceClass.VOLTAGE, StateClass.MEASUREMENT),
    Field.IDC: (DeviceClass.CURRENT, StateClass.MEASUREMENT),
    Field.PDC: (DeviceClass.POWER, StateClass.MEASUREMENT),
    Field.YD: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.YW: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.YT: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.UAC: (DeviceClass.VOLTAGE, StateClass.MEASUREMENT),
    Field.IAC: (DeviceClass.CURRENT, StateClass.MEASUREMENT),
    Field.PAC: (DeviceClass.POWER, StateClass.MEASUREMENT),
    Field.F: (DeviceClass.FREQUENCY, StateClass.MEASUREMENT),
    Field.T: (DeviceClass.TEMPERATURE, StateClass.MEASUREMENT),
    Field.PF: (DeviceClass.NONE, StateClass.NONE),
    Field.EFF: (DeviceClass.NONE, StateClass.NONE),
    Field.IRR: (DeviceClass.NONE, StateClass.NONE),
}


class InverterGen(IntEnum):
    """Inverter protocol generation."""

    HM = 0
    MI = 1


class InverterType(IntEnum):
    """Number of PV inputs of an inverter model."""

    ONE_CH = 0
    TWO_CH = 1
    FOUR_CH = 2


class CalcFunction(IntEnum):
    """Identifiers of derived-value calculations."""

    YT_CH0 = 0
    YD_CH0 = 1
    UDC_CH = 2
    PDC_CH0 = 3
    EFF_CH0 = 4
    IRR_CH = 5


class InfoCommand(IntEnum):
    """Information request command ids."""

    INVERTER_DEV_INFORM_ALL = 0x01
    SYSTEM_CONFIG_PARA = 0x05
    REAL_TIME_RUN_DATA_DEBUG = 0x0B
    ALARM_DATA = 0x11
    INIT_DATA_STATE = 0xFF


class DevControlCommand(IntEnum):
    """Device control command ids."""

    TURN_ON = 0
    TURN_OFF = 1
    RESTART = 2
    LOCK = 3
    UNLOCK = 4
    ACTIVE_POWER_CONTR = 11
    REACTIVE_POWER_CONTR = 12
    PF_SET = 13
    CLEAN_STATE_LOCK_AND_ALARM = 20
    SELF_INSPECTION = 40
    INIT = 0xFF


POWER_LIMIT_ABSOLUTE_NON_PERSISTENT = 0x0000
POWER_LIMIT_RELATIVE_NON_PERSISTENT = 0x0001
POWER_LIMIT_ABSOLUTE_PERSISTENT = 0x0100
POWER_LIMIT_RELATIVE_PERSISTENT = 0x0101

CMD_CALC = 0xFFFF

CH0, CH1, CH2, CH3, CH4 = range(5)


@dataclass(frozen=True)
class FieldAssignment:
    """Where a field lives in a payload, or which calculation derives it.

    For calculated entries ``start`` holds the calculation id and ``num``
    its argument.
    """

    field: Field
    unit: Unit
    channel: int
    start: int
    num: int
    div: int

    def is_calculated(self) -> bool:
        return self.div == CMD_CALC


def _a(field, unit, channel, start, num, div) -> FieldAssignment:
    return FieldAssignment(Field(field), Unit(unit), channel, start, num, div)


F, U, C = Field, Unit, CalcFunction

INFO_ASSIGNMENT = (
    _a(F.FW_VERSION, U.NONE, CH0, 0, 2, 1),
    _a(F.FW_BUILD_YEAR, U.NONE, CH0, 2, 2, 1),
    _a(F.FW_BUILD_MONTH_DAY, U.NONE, CH0, 4, 2, 1),
    _a(F.FW_BUILD_HOUR_MINUTE, U.NONE, CH0, 6, 2, 1),
    _a(F.HW_ID, U.NONE, CH0, 8, 2, 1),
)
INFO_PAYLOAD_LEN = 14

SYSTEM_CONFIG_ASSIGNMENT = (
    _a(F.ACT_ACTIVE_PWR_LIMIT, U.PCT, CH0, 2, 2, 10),
)
SYSTEM_CONFIG_PAYLOAD_LEN = 14

ALARM_DATA_ASSIGNMENT = (
    _a(F.LAST_ALARM_CODE, U.NONE, CH0, 0, 2, 1),
)
ALARM_DATA_PAYLOAD_LEN = 0  # 0 disables the length check
ALARM_LOG_ENTRY_SIZE = 12

_CH0_CALCULATED = (
    _a(F.YD, U.WH, CH0, C.YD_CH0, 0, CMD_CALC),
    _a(F.YT, U.KWH, CH0, C.YT_CH0, 0, CMD_CALC),
    _a(F.PDC, U.W, CH0, C.PDC_CH0, 0, CMD_CALC),
    _a(F.EFF, U.PCT, CH0, C.EFF_CH0, 0, CMD_CALC),
)

HM1CH_ASSIGNMENT = (
    _a(F.UDC, U.V, CH1, 2, 2, 10),
    _a(F.IDC, U.A, CH1, 4, 2, 100),
    _a(F.PDC, U.W, CH1, 6, 2, 10),
    _a(F.YD, U.WH, CH1, 12, 2, 1),
    _a(F.YT, U.KWH, CH1, 8, 4, 1000),
    _a(F.IRR, U.PCT, CH1, C.IRR_CH, CH1, CMD_CALC),
    _a(F.UAC, U.V, CH0, 14, 2, 10),
    _a(F.IAC, U.A, CH0, 22, 2, 100),
    _a(F.PAC, U.W, CH0, 18, 2, 10),
    _a(F.Q, U.VAR, CH0, 20, 2, 10),
    _a(F.F, U.HZ, CH0, 16, 2, 100),
    _a(F.PF, U.NONE, CH0, 24, 2, 1000),
    _a(F.T, U.C, CH0, 26, 2, 10),
    _a(F.EVT, U.NONE, CH0, 28, 2, 1),
) + _CH0_CALCULATED
HM1CH_PAYLOAD_LEN = 30

HM2CH_ASSIGNMENT = (
    _a(F.UDC, U.V, CH1, 2, 2, 10),
    _a(F.IDC, U.A, CH1, 4, 2, 100),
    _a(F.PDC, U.W, CH1, 6, 2, 10),
    _a(F.YD, U.WH, CH1, 22, 2, 1),
    _a(F.YT, U.KWH, CH1, 14, 4, 1000),
    _a(F.IRR, U.PCT, CH1, C.IRR_CH, CH1, CMD_CALC),
    _a(F.UDC, U.V, CH2, 8, 2, 10),
    _a(F.IDC, U.A, CH2, 10, 2, 100),
    _a(F.PDC, U.W, CH2, 12, 2, 10),
    _a(F.YD, U.WH, CH2, 24, 2, 1),
    _a(F.YT, U.KWH, CH2, 18, 4, 1000),
    _a(F.IRR, U.PCT, CH2, C.IRR_CH, CH2, CMD_CALC),
    _a(F.UAC, U.V, CH0, 26, 2, 10),
    _a(F.IAC, U.A, CH0, 34, 2, 100),
    _a(F.PAC, U.W, CH0, 30, 2, 10),
    _a(F.Q, U.VAR, CH0, 32, 2, 10),
    _a(F.F, U.HZ, CH0, 28, 2, 100),
    _a(F.PF, U.NONE, CH0, 36, 2, 1000),
    _a(F.T, U.C, CH0, 38, 2, 10),
    _a(F.EVT, U.NONE, CH0, 40, 2, 1),
) + _CH0_CALCULATED
HM2CH_PAYLOAD_LEN = 42

HM4CH_ASSIGNMENT = (
    _a(F.UDC, U.V, CH1, 2, 2, 10),
    _a(F.IDC, U.A, CH1, 4, 2, 100),
    _a(F.PDC, U.W, CH1, 8, 2, 10),
    _a(F.YD, U.WH, CH1, 20, 2, 1),
    _a(F.YT, U.KWH, CH1, 12, 4, 1000),
    _a(F.IRR, U.PCT, CH1, C.IRR_CH, CH1, CMD_CALC),
    _a(F.UDC, U.V, CH2, C.UDC_CH, CH1, CMD_CALC),
    _a(F.IDC, U.A, CH2, 6, 2, 100),
    _a(F.PDC, U.W, CH2, 10, 2, 10),
    _a(F.YD, U.WH, CH2, 22, 2, 1),
    _a(F.YT, U.KWH, CH2, 16, 4, 1000),
    _a(F.IRR, U.PCT, CH2, C.IRR_CH, CH2, CMD_CALC),
    _a(F.UDC, U.V, CH3, 24, 2, 10),
    _a(F.IDC, U.A, CH3, 26, 2, 100),
    _a(F.PDC, U.W, CH3, 30, 2, 10),
    _a(F.YD, U.WH, CH3, 42, 2, 1),
    _a(F.YT, U.KWH, CH3, 34, 4, 1000),
    _a(F.IRR, U.PCT, CH3, C.IRR_CH, CH3, CMD_CALC),
    _a(F.UDC, U.V, CH4, C.UDC_CH, CH3, CMD_CALC),
    _a(F.IDC, U.A, CH4, 28, 2, 100),
    _a(F.PDC, U.W, CH4, 32, 2, 10),
    _a(F.YD, U.WH, CH4, 44, 2, 1),
    _a(F.YT, U.KWH, CH4, 38, 4, 1000),
    _a(F.IRR, U.PCT, CH4, C.IRR_CH, CH4, CMD_CALC),
    _a(F.UAC, U.V, CH0, 46, 2, 10),
    _a(F.IAC, U.A, CH0, 54, 2, 100),
    _a(F.PAC, U.W, CH0, 50, 2, 10),
    _a(F.Q, U.VAR, CH0, 52, 2, 10),
    _a(F.F, U.HZ, CH0, 48, 2, 100),
    _a(F.PF, U.NONE, CH0, 56, 2, 1000),
    _a(F.T, U.C, CH0, 58, 2, 10),
    _a(F.EVT, U.NONE, CH0, 60, 2, 1),
) + _CH0_CALCULATED
HM4CH_PAYLOAD_LEN = 62

del F, U, C

_REALTIME = {
    InverterType.ONE_CH: (HM1CH_ASSIGNMENT, HM1CH_PAYLOAD_LEN, 1),
    InverterType.TWO_CH: (HM2CH_ASSIGNMENT, HM2CH_PAYLOAD_LEN, 2),
    InverterType.FOUR_CH: (HM4CH_ASSIGNMENT, HM4CH_PAYLOAD_LEN, 4),
}


def _realtime_entry(inverter_type):
    try:
        return _REALTIME[InverterType(inverter_type)]
    except ValueError:
        return (), 0, 0


def unit_name(unit) -> str:
    """Return the display string of a unit."""
    return _UNIT_NAMES[Unit(unit)]


def field_name(field) -> str:
    """Return the display name of a field."""
    return _FIELD_NAMES[Field(field)]


def discovery_classes(field) -> tuple[DeviceClass, StateClass]:
    """Return the MQTT discovery device and state class of a field."""
    return _DISCOVERY_CLASSES.get(Field(field), (DeviceClass.NONE, StateClass.NONE))


def realtime_assignments(inverter_type) -> tuple[FieldAssignment, ...]:
    """Return the real-time data layout for an inverter type (empty if unknown)."""
    return _realtime_entry(inverter_type)[0]


def realtime_payload_length(inverter_type) -> int:
    """Return the expected real-time payload length (0 if unknown)."""
    return _realtime_entry(inverter_type)[1]


def channel_count(inverter_type) -> int:
    """Return the number of PV channels (0 if unknown)."""
    return _realtime_entry(inverter_type)[2]