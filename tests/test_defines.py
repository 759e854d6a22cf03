import pytest

from ahoydtu.defines import (
    ALARM_DATA_ASSIGNMENT,
    CMD_CALC,
    INFO_ASSIGNMENT,
    INFO_PAYLOAD_LEN,
    SYSTEM_CONFIG_ASSIGNMENT,
    SYSTEM_CONFIG_PAYLOAD_LEN,
    CalcFunction,
    DeviceClass,
    Field,
    FieldAssignment,
    InverterType,
    StateClass,
    Unit,
    channel_count,
    discovery_classes,
    field_name,
    realtime_assignments,
    realtime_payload_length,
    unit_name,
)


def test_unit_names_from_table():
    assert unit_name(Unit.C) == "°C"
    assert unit_name(Unit.KWH) == "kWh"
    assert unit_name(Unit.NONE) == ""


def test_field_names_from_table():
    assert field_name(Field.EVT) == "ALARM_MES_ID"
    assert field_name(Field.ACT_ACTIVE_PWR_LIMIT) == "active_PowerLimit"
    assert field_name(Field.LAST_ALARM_CODE) == "LastAlarmCode"


def test_invalid_unit_and_field_raise():
    with pytest.raises(ValueError):
        unit_name(99)
    with pytest.raises(ValueError):
        field_name(99)


def test_discovery_classes():
    dev, state = discovery_classes(Field.YT)
    assert dev is DeviceClass.ENERGY
    assert state is StateClass.TOTAL_INCREASING
    assert dev.label == "energy"
    assert state.label == "total_increasing"
    assert discovery_classes(Field.T)[0].label == "temperature"
    assert discovery_classes(Field.PF) == (DeviceClass.NONE, StateClass.NONE)
    assert discovery_classes(Field.HW_ID)[0].label is None


@pytest.mark.parametrize(
    "inv_type, length, channels",
    [
        (InverterType.ONE_CH, 30, 1),
        (InverterType.TWO_CH, 42, 2),
        (InverterType.FOUR_CH, 62, 4),
    ],
)
def test_realtime_layout(inv_type, length, channels):
    assert realtime_payload_length(inv_type) == length
    assert channel_count(inv_type) == channels
    table = realtime_assignments(inv_type)
    for entry in table:
        if entry.is_calculated():
            assert entry.start in set(CalcFunction)
        else:
            assert entry.start + entry.num <= length
    present = {(e.channel, e.field) for e in table}
    for ch in range(1, channels + 1):
        for fld in (Field.UDC, Field.IDC, Field.PDC, Field.YD, Field.YT, Field.IRR):
            assert (ch, fld) in present
    for fld in (Field.UAC, Field.PAC, Field.T, Field.EVT, Field.EFF):
        assert (0, fld) in present
    assert len(present) == len(table)


def test_unknown_type_is_empty():
    assert realtime_assignments(7) == ()
    assert realtime_payload_length(7) == 0
    assert channel_count(7) == 0


def test_is_calculated():
    calc = FieldAssignment(Field.IRR, Unit.PCT, 1, CalcFunction.IRR_CH, 1, CMD_CALC)
    raw = FieldAssignment(Field.UDC, Unit.V, 1, 2, 2, 10)
    assert calc.is_calculated() is True
    assert raw.is_calculated() is False


def test_other_tables_fit_payload():
    for entry in INFO_ASSIGNMENT:
        assert entry.is_calculated() is False
        assert entry.start + entry.num <= INFO_PAYLOAD_LEN
    for entry in SYSTEM_CONFIG_ASSIGNMENT:
        assert entry.is_calculated() is False
        assert entry.start + entry.num <= SYSTEM_CONFIG_PAYLOAD_LEN
    assert field_name(ALARM_DATA_ASSIGNMENT[0].field) == "LastAlarmCode"
    assert field_name(INFO_ASSIGNMENT[0].field) == "FWVersion"
    assert field_name(SYSTEM_CONFIG_ASSIGNMENT[0].field) == "active_PowerLimit"
    assert unit_name(SYSTEM_CONFIG_ASSIGNMENT[0].unit) == "%"
    assert SYSTEM_CONFIG_ASSIGNMENT[0].div == 10