# ahoydtu

Pure-Python building blocks for the protocol spoken between a DTU and
HM and MI series micro-inverters:

- `ahoydtu.defines`: the enums `Unit`, `Field`, `DeviceClass`, `StateClass`,
  `InverterGen`, `InverterType`, `CalcFunction`, `InfoCommand` and
  `DevControlCommand`; the `FieldAssignment` dataclass describing where a
  value sits in a payload (or which calculation derives it); the per-model
  assignment tables; and the helpers `unit_name`, `field_name`,
  `discovery_classes`, `realtime_assignments`, `realtime_payload_length` and
  `channel_count`.
- `ahoydtu.alarms`: `alarm_text` for alarm code descriptions, and
  `parse_alarm_log` / `iter_alarm_log` returning `AlarmEntry` objects
  (code, start and end in seconds since midnight).
- `ahoydtu.radio`: `HmRadio`, which builds request, control and bare
  command frames with their CRCs, tracks TX/RX channel hopping and send
  counters, and queues received frames as `Packet` objects; `dtu_radio_id`
  derives the DTU radio address from a host chip id.
- `ahoydtu.mi_status`: `mi_status_code` turns the state bytes of an MI
  status message into an alarm code, and `mi_data_channel` maps an MI data
  response id to its PV channel.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from ahoydtu.alarms import alarm_text
from ahoydtu.defines import Field, InverterType, channel_count, realtime_assignments
from ahoydtu.mi_status import mi_status_code
from ahoydtu.radio import HmRadio

print(channel_count(InverterType.TWO_CH))   # 2
print(alarm_text(141))                      # Grid overvoltage
print(alarm_text(mi_status_code(2, 0, 1)))  # PV Input 1 Overvoltage/Undervoltage

for assignment in realtime_assignments(InverterType.ONE_CH):
    if assignment.field is Field.PAC:
        print(assignment.start, assignment.num, assignment.div)  # 18 2 10

sent = []
radio = HmRadio(transmit=lambda channel, inv_id, frame: sent.append((channel, frame)))
radio.send_cmd_packet(0x0123456701, 0x15, 0x81, False)
channel, frame = sent[0]
print(channel, frame.hex())
```

`HmRadio` does not drive any radio hardware: each finished frame is passed
to the `transmit(channel, inv_id, frame)` callback and also kept in
`last_frame`. Frames that have arrived are handed to `receive`, which queues
them in `received` and returns `True` once the last frame of an answer is
seen.

## What this package does not do

It holds no inverter state: there is no object that keeps measured values,
a command queue or derived values such as total yield or efficiency, no
detection of the inverter model from its serial number, and no assembly of
received fragments into complete payloads with retransmit handling. It
offers no command-line tool, server or storage; it is a library of tables,
decoders and frame builders to be used from your own code.