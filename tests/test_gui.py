from unittest.mock import patch

import pytest
import serial

from stewartmon.gui import MonitorApp, available_ports, status_text
from stewartmon.monitor import Monitor
from stewartmon.protocol import ServoSample, crc8
from stewartmon.hexagon import servo_angle_to_value


class FakePortInfo:
    def __init__(self, device):
        self.device = device


class FakeSerial:
    def __init__(self, port, baudrate):
        self.port = port
        self.baudrate = baudrate
        self.closed = False
        self._data = bytearray()

    def push(self, data):
        self._data += data

    @property
    def in_waiting(self):
        return len(self._data)

    def read(self, size):
        chunk = bytes(self._data[:size])
        del self._data[:size]
        return chunk

    def close(self):
        self.closed = True


class Recorder:
    def __init__(self):
        self.calls = []
        self.opened = []

    def notify(self, level, title, message):
        self.calls.append((level, title, message))

    def open_port(self, port, baudrate):
        fake = FakeSerial(port, baudrate)
        self.opened.append(fake)
        return fake


@pytest.fixture
def recorder():
    return Recorder()


def make_app(recorder, ports=("/dev/ttyUSB0", "/dev/ttyUSB1")):
    return MonitorApp(
        Monitor(clock=lambda: 0.0),
        open_port=recorder.open_port,
        list_ports=lambda: list(ports),
        notify=recorder.notify,
    )


def test_status_text_disconnected():
    assert status_text(False, "/dev/ttyUSB0") == "✗ Disconnected"


def test_status_text_connected_names_port():
    assert status_text(True, "/dev/ttyUSB0") == "✓ Connected to /dev/ttyUSB0"


def test_available_ports_lists_devices():
    infos = [FakePortInfo("/dev/ttyACM0"), FakePortInfo("/dev/ttyS1")]
    with patch("serial.tools.list_ports.comports", return_value=infos):
        assert available_ports() == ["/dev/ttyACM0", "/dev/ttyS1"]


def test_refresh_selects_first_port(recorder):
    app = make_app(recorder)
    assert app.refresh_ports() == ["/dev/ttyUSB0", "/dev/ttyUSB1"]
    assert app.selected_port == "/dev/ttyUSB0"


def test_refresh_with_no_ports_clears_selection(recorder):
    app = make_app(recorder, ports=())
    app.selected_port = "/dev/ttyUSB9"
    assert app.refresh_ports() == []
    assert app.selected_port is None


def test_connect_without_port_warns(recorder):
    app = make_app(recorder, ports=())
    app.refresh_ports()
    assert app.toggle_connection() is False
    assert recorder.calls == [("warning", "Error", "No port selected!")]
    assert recorder.opened == []


def test_connect_opens_selected_port_at_115200(recorder):
    app = make_app(recorder)
    app.refresh_ports()
    app.selected_port = "/dev/ttyUSB1"
    assert app.toggle_connection() is True
    assert [(p.port, p.baudrate) for p in recorder.opened] == [("/dev/ttyUSB1", 115200)]
    assert app.status == "✓ Connected to /dev/ttyUSB1"


def test_toggle_twice_disconnects(recorder):
    app = make_app(recorder)
    app.refresh_ports()
    app.toggle_connection()
    assert app.toggle_connection() is False
    assert recorder.opened[0].closed is True
    assert app.connected is False
    assert app.status == "✗ Disconnected"


def test_open_failure_reports_error(recorder):
    def failing(port, baudrate):
        raise serial.SerialException("busy")

    app = MonitorApp(
        open_port=failing,
        list_ports=lambda: ["/dev/ttyUSB0"],
        notify=recorder.notify,
    )
    app.refresh_ports()
    assert app.toggle_connection() is False
    assert recorder.calls == [("error", "Error", "Failed to open port: busy")]
    assert app.connected is False


def test_poll_while_disconnected_returns_nothing(recorder):
    app = make_app(recorder)
    assert app.poll_serial() == []


def test_poll_applies_buffered_lines(recorder):
    app = make_app(recorder)
    app.refresh_ports()
    app.toggle_connection()
    angles = [0, 10, 20, 30, 40, 50]
    body = ",".join(str(a) for a in angles)
    recorder.opened[0].push(f"S:{body}*{crc8(angles):02X}\n".encode())
    samples = app.poll_serial()
    assert samples == [ServoSample(tuple(angles))]
    assert app.monitor.hexagon.values == tuple(servo_angle_to_value(a) for a in angles)
    assert app.poll_serial() == []


def test_close_closes_open_port(recorder):
    app = make_app(recorder)
    app.refresh_ports()
    app.toggle_connection()
    app.close()
    assert recorder.opened[0].closed is True
    assert app.connected is False