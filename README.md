# stewartmon

A desktop monitor for a Stewart platform that streams IMU and servo data
over a serial line. The window shows:

- the six servo positions as bars arranged around a hexagon, coloured from
  green (0.0) through yellow (0.5) to red (1.0);
- a G-force plot of the X/Y acceleration with rings at each whole g up to
  3 g and a trace that fades out over two seconds;
- a readout of the accelerometer (m/s²) and gyroscope (°/s) values;
- a wireframe view of the tilted platform with a ball sliding on it, with a
  *Gravity* field and a *Reset Ball* button.

The window is built with Tkinter, which must be available in your Python
installation. Serial access uses pyserial.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Running the monitor

```
stewartmon
```

Pick a serial port from the list (the *Ports ▼* button re-reads it and
selects the first port) and press *Connect*. The port is opened at 115200
baud and polled every 10 ms. Press the button again to disconnect. A read
error closes the port and reports the error.

The ball simulation advances every 16 ms. A *Gravity* value that is not a
number is taken as 0.

## The line protocol

The device sends newline-terminated ASCII lines; surrounding whitespace is
ignored and blank lines are skipped. Each line ends with `*` followed by
exactly two hexadecimal digits: a CRC-8 checksum (polynomial `0x31`, initial
value `0xFF`) computed over the numeric values, each taken as a 16-bit
integer and fed least-significant byte first.

IMU line: an IMU id followed by six raw readings. The id is not part of the
checksum. The readings are taken as signed 16-bit values.

```
IMU:<id>,<ax>,<ay>,<az>,<gx>,<gy>,<gz>*<crc>
```

Servo line: six servo angles in degrees, from -90 to 90. All six take part in
the checksum. Each angle sets one bar to `(angle + 90) / 180`, clamped to
0..1.

```
S:<a1>,<a2>,<a3>,<a4>,<a5>,<a6>*<crc>
```

Lines with a malformed checksum, a checksum mismatch, a wrong number of
fields or values that are not integers are rejected, as are lines of any
other kind; each rejection is logged as a warning. Readings from IMU 1 update
the readout, the platform tilt and the G-force plot (raw value / 16390 gives
g). Readings from IMU 2 are accepted but not shown; any other IMU id is
logged as unknown.

## Using the pieces as a library

The protocol handling does not depend on the GUI:

```python
from stewartmon.protocol import LineSplitter, ProtocolError, parse_line

splitter = LineSplitter()
for chunk in incoming_chunks:
    for line in splitter.feed(chunk):
        try:
            sample = parse_line(line)
        except ProtocolError as exc:
            print("rejected:", exc)
            continue
        print(sample)
```

- `stewartmon.protocol`: `crc8(values)`, `parse_line(line)` returning an
  `ImuSample`, a `ServoSample` or `None` for a blank line, and `LineSplitter`.
- `stewartmon.monitor`: `Monitor`, whose `feed(data)` takes raw bytes and
  returns the samples they completed, updating its `readout`, `platform`,
  `gforce` and `hexagon` models; `g_from_raw(raw)`.
- `stewartmon.hexagon`: `HexagonBars`, `bar_color(value)`,
  `servo_angle_to_value(angle)`.
- `stewartmon.gforce`: `GForceTrace` and `TracePoint`.
- `stewartmon.imudisplay`: `ImuReadout`, `format_accel(raw)`,
  `format_gyro(raw)`.
- `stewartmon.platform`: `Vector3`, `Quaternion`, `orientation_from_accel`
  and `PlatformSimulation`.
- `stewartmon.gui`: `MonitorApp`, which handles port listing, connecting and
  polling without any toolkit; `status_text`, `available_ports` and `main`.

## What it does not do

The platform view is a flat wireframe drawn from a fixed viewpoint; there is
no shaded 3D rendering and no camera that can be moved. Readings from a
second IMU are not displayed anywhere. Nothing is ever written to the serial
port, and no data is recorded or saved.