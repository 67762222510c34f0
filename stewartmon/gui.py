"""Desktop window: port selection, platform view, servo bars and IMU plots."""

from __future__ import annotations

import argparse
import itertools
import logging
import math
from typing import Callable, Iterable, Optional, Sequence

import serial
from serial.tools import list_ports

from .hexagon import BAR_WIDTH, bar_color
from .imudisplay import ImuReadout
from .monitor import Monitor, Sample
from .platform import (
    BALL_RADIUS,
    PLATFORM_HALF_X,
    PLATFORM_HALF_Z,
    PLATFORM_TOP,
    Vector3,
)

logger = logging.getLogger(__name__)

BAUD_RATE = 115200
POLL_INTERVAL_MS = 10
PHYSICS_INTERVAL_MS = 16

Notify = Callable[[str, str, str], None]
PortOpener = Callable[[str, int], "serial.SerialBase"]


def status_text(connected: bool, port: str) -> str:
    """Text of the connection status label."""
    return f"✓ Connected to {port}" if connected else "✗ Disconnected"


def available_ports() -> list[str]:
    """Device names of the serial ports present on this machine."""
    return [port.device for port in list_ports.comports()]


def _open_serial(port: str, baudrate: int) -> serial.Serial:
    return serial.Serial(port, baudrate, timeout=0)


def _log_notify(level: str, title: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.WARNING, "%s: %s", title, message)


class MonitorApp:
    """Serial connection handling on top of a Monitor, independent of any toolkit."""

    def __init__(
        self,
        monitor: Optional[Monitor] = None,
        *,
        open_port: PortOpener = _open_serial,
        list_ports: Callable[[], Iterable[str]] = available_ports,
        notify: Notify = _log_notify,
    ) -> None:
        self.monitor = monitor if monitor is not None else Monitor()
        self.ports: list[str] = []
        self.selected_port: Optional[str] = None
        self._open_port = open_port
        self._list_ports = list_ports
        self._notify = notify
        self._serial = None

    @property
    def connected(self) -> bool:
        return self._serial is not None

    @property
    def status(self) -> str:
        return status_text(self.connected, self.selected_port or "")

    def refresh_ports(self) -> list[str]:
        """Re-read the port list; the first port becomes the selection."""
        self.ports = list(self._list_ports())
        self.selected_port = self.ports[0] if self.ports else None
        return self.ports

    def toggle_connection(self) -> bool:
        """Close an open port, or open the selected one; return the new state."""
        if self._serial is not None:
            self.close()
            return False
        if not self.selected_port:
            self._notify("warning", "Error", "No port selected!")
            return False
        try:
            self._serial = self._open_port(self.selected_port, BAUD_RATE)
        except (serial.SerialException, OSError) as exc:
            self._notify("error", "Error", f"Failed to open port: {exc}")
            self._serial = None
        return self.connected

    def poll_serial(self) -> list[Sample]:
        """Read whatever the port has buffered and apply it."""
        if self._serial is None:
            return []
        waiting = self._serial.in_waiting
        if not waiting:
            return []
        return self.monitor.feed(self._serial.read(waiting))

    def close(self) -> None:
        """Close the port if it is open."""
        if self._serial is not None:
            port, self._serial = self._serial, None
            port.close()


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.y * b.z - a.z * b.y, a.z * b.x - a.x * b.z, a.x * b.y - a.y * b.x)


def _hex_color(rgb: Sequence[int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*(max(0, min(255, int(c))) for c in rgb))


def _blend(fg: Sequence[int], bg: Sequence[int], alpha: float) -> str:
    return _hex_color([f * alpha + b * (1.0 - alpha) for f, b in zip(fg, bg)])


_CAMERA_POSITION = Vector3(10.0, 5.0, 10.0)
_FORWARD = (-_CAMERA_POSITION).normalized()
_RIGHT = _cross(_FORWARD, Vector3(0.0, 1.0, 0.0)).normalized()
_UP = _cross(_RIGHT, _FORWARD)
_PLATFORM_HALF_Y = PLATFORM_TOP

_DARK_BG = (0x30, 0x30, 0x30)
_TRACE_RGB = (0, 0, 255)


class _MainWindow:
    """Tk widgets that display a MonitorApp and drive its timers."""

    def __init__(self, root, app: MonitorApp) -> None:
        import tkinter as tk
        from tkinter import ttk

        self.tk = tk
        self.root = root
        self.app = app
        root.title("Platform monitor")
        root.geometry("800x700")
        root.protocol("WM_DELETE_WINDOW", self._on_close)

        left = tk.Frame(root)
        left.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=6, pady=6)
        right = tk.Frame(root)
        right.pack(side=tk.LEFT, fill=tk.Y, padx=6, pady=6)

        controls = tk.Frame(left)
        controls.pack(fill=tk.X)
        tk.Button(controls, text="Ports ▼", width=8, command=self._on_refresh).pack(side=tk.LEFT)
        self.port_var = tk.StringVar()
        self.port_box = ttk.Combobox(
            controls, textvariable=self.port_var, state="readonly", width=20
        )
        self.port_box.bind("<<ComboboxSelected>>", self._on_select)
        self.port_box.pack(side=tk.LEFT, padx=4)
        self.connect_button = tk.Button(
            controls, text="Connect", width=10, command=self._on_toggle
        )
        self.connect_button.pack(side=tk.LEFT, padx=4)
        self.status_label = tk.Label(controls, font=("TkDefaultFont", 10, "bold"))
        self.status_label.pack(side=tk.LEFT, padx=4)

        frame = tk.Frame(left, relief=tk.RAISED, borderwidth=2)
        frame.pack(anchor=tk.NW, pady=6)
        self.platform_canvas = tk.Canvas(
            frame, width=500, height=400, background="#202020", highlightthickness=0
        )
        self.platform_canvas.pack()
        physics = tk.Frame(frame)
        physics.pack(fill=tk.X)
        tk.Label(physics, text="Gravity:").pack(side=tk.LEFT)
        self.gravity_var = tk.StringVar(value="9.8")
        tk.Entry(physics, textvariable=self.gravity_var, width=6).pack(side=tk.LEFT)
        tk.Button(
            physics,
            text="Reset Ball",
            bg="black",
            fg="white",
            relief=tk.FLAT,
            command=self.app.monitor.platform.reset_ball,
        ).pack(side=tk.LEFT, padx=4)

        self.hex_canvas = tk.Canvas(
            right, width=200, height=200, background=_hex_color(_DARK_BG), highlightthickness=0
        )
        self.hex_canvas.pack(pady=4)
        self.gforce_canvas = tk.Canvas(
            right, width=200, height=200, background=_hex_color(_DARK_BG), highlightthickness=0
        )
        self.gforce_canvas.pack(pady=4)
        self.value_labels = self._build_readout(right, self.app.monitor.readout)

        self._on_refresh()
        self._redraw()
        self.root.after(PHYSICS_INTERVAL_MS, self._physics_tick)
        self.root.after(POLL_INTERVAL_MS, self._poll_tick)

    def _build_readout(self, parent, readout: ImuReadout):
        tk = self.tk
        box = tk.Frame(parent, bg="#404040", padx=10, pady=10)
        box.pack(fill=tk.X, pady=4)
        tk.Label(
            box, text=readout.title, bg="#404040", fg="white",
            font=("TkDefaultFont", 12, "bold"),
        ).grid(row=0, column=0, columnspan=3)
        labels = []
        for row, (name, value, unit) in enumerate(readout.rows(), start=1):
            tk.Label(box, text=name, bg="#404040", fg="white").grid(row=row, column=0, sticky=tk.W)
            value_label = tk.Label(
                box, text=value, bg="grey", fg="black", width=9, anchor=tk.E,
                relief=tk.SOLID, borderwidth=1, font=("Courier New", 10),
            )
            value_label.grid(row=row, column=1, padx=4, pady=2)
            tk.Label(box, text=unit, bg="#404040", fg="white").grid(row=row, column=2, sticky=tk.W)
            labels.append(value_label)
        return labels

    def _on_refresh(self) -> None:
        self.app.refresh_ports()
        self.port_box["values"] = self.app.ports
        self.port_var.set(self.app.selected_port or "")
        self._update_status()

    def _on_select(self, _event=None) -> None:
        self.app.selected_port = self.port_var.get() or None

    def _on_toggle(self) -> None:
        self.app.toggle_connection()
        self._update_status()

    def _update_status(self) -> None:
        connected = self.app.connected
        self.status_label.configure(
            text=self.app.status, fg="green" if connected else "red"
        )
        self.connect_button.configure(text="Disconnect" if connected else "Connect")

    def _notify_error(self, message: str) -> None:
        from tkinter import messagebox

        messagebox.showerror("Error", message, parent=self.root)

    def _on_close(self) -> None:
        self.app.close()
        self.root.destroy()

    def _physics_tick(self) -> None:
        platform = self.app.monitor.platform
        try:
            platform.gravity = float(self.gravity_var.get())
        except ValueError:
            platform.gravity = 0.0
        platform.step()
        self._draw_platform()
        self.root.after(PHYSICS_INTERVAL_MS, self._physics_tick)

    def _poll_tick(self) -> None:
        try:
            samples = self.app.poll_serial()
        except (serial.SerialException, OSError) as exc:
            self.app.close()
            self._update_status()
            self._notify_error(f"Serial port error: {exc}")
            samples = []
        if samples:
            self._redraw()
        self.root.after(POLL_INTERVAL_MS, self._poll_tick)

    def _redraw(self) -> None:
        for label, (_, value, _) in zip(self.value_labels, self.app.monitor.readout.rows()):
            label.configure(text=value)
        self._draw_hexagon()
        self._draw_gforce()

    def _project(self, v: Vector3, scale: float = 45.0) -> tuple[float, float]:
        return 250.0 + v.dot(_RIGHT) * scale, 200.0 - v.dot(_UP) * scale

    def _draw_platform(self) -> None:
        canvas = self.platform_canvas
        canvas.delete("all")
        platform = self.app.monitor.platform
        corners = {
            signs: platform.rotation.rotate(
                Vector3(
                    signs[0] * PLATFORM_HALF_X,
                    signs[1] * _PLATFORM_HALF_Y,
                    signs[2] * PLATFORM_HALF_Z,
                )
            )
            for signs in itertools.product((-1, 1), repeat=3)
        }
        for a, b in itertools.combinations(corners, 2):
            if sum(x != y for x, y in zip(a, b)) == 1:
                canvas.create_line(
                    *self._project(corners[a]), *self._project(corners[b]),
                    fill="#00b140", width=2,
                )
        bx, by = self._project(platform.ball_position)
        r = BALL_RADIUS * 45.0
        canvas.create_oval(bx - r, by - r, bx + r, by + r, fill="red", outline="")

    def _draw_hexagon(self) -> None:
        canvas = self.hex_canvas
        canvas.delete("all")
        bars = self.app.monitor.hexagon
        points = bars.hexagon_points()
        tips = bars.bar_tips()
        for (ox, oy), (tx, ty), value in zip(points, tips, bars.values):
            cx, cy = bars.center
            dx, dy = cx - ox, cy - oy
            length = math.hypot(dx, dy)
            nx, ny = -dy / length * BAR_WIDTH / 2, dx / length * BAR_WIDTH / 2
            canvas.create_polygon(
                ox + nx, oy + ny, tx + nx, ty + ny, tx - nx, ty - ny, ox - nx, oy - ny,
                fill=_hex_color(bar_color(value)), outline="white", width=2,
            )
        canvas.create_polygon(*itertools.chain.from_iterable(tips), fill="", outline="magenta", width=2)
        for (ox, oy), height in zip(points, bars.bar_heights()):
            if height > 0:
                canvas.create_oval(
                    ox - 5, oy - 5, ox + 5, oy - 5 + height,
                    fill="black", outline="", stipple="gray25",
                )
        canvas.create_polygon(
            *itertools.chain.from_iterable(points), fill="", outline="white", width=3
        )

    def _draw_gforce(self) -> None:
        canvas = self.gforce_canvas
        canvas.delete("all")
        trace = self.app.monitor.gforce
        w, h = int(canvas["width"]), int(canvas["height"])
        cx, cy = w / 2.0, h / 2.0
        radius = min(w, h) / 2.0 * 0.9
        for r in trace.ring_radii(radius):
            canvas.create_oval(cx - r, cy - r, cx + r, cy + r, outline="gray", dash=(4, 4))
        canvas.create_line(cx - radius, cy, cx + radius, cy, fill="lightgray")
        canvas.create_line(cx, cy - radius, cx, cy + radius, fill="lightgray")
        for (x1, y1), (x2, y2), alpha in trace.segments(radius):
            canvas.create_line(
                cx + x1, cy + y1, cx + x2, cy + y2, fill=_blend(_TRACE_RGB, _DARK_BG, alpha)
            )
        canvas.create_oval(cx - 3, cy - 3, cx + 3, cy + 3, fill="white", outline="")
        gx, gy = trace.dot_position(radius)
        canvas.create_oval(
            cx + gx - 10, cy + gy - 10, cx + gx + 10, cy + gy + 10,
            fill=trace.dot_color(), outline="",
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the monitor window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="stewartmon", description="Monitor a platform controller over a serial port."
    )
    parser.parse_args(argv)

    import tkinter as tk
    from tkinter import messagebox

    root = tk.Tk()

    def notify(level: str, title: str, message: str) -> None:
        show = messagebox.showwarning if level == "warning" else messagebox.showerror
        show(title, message, parent=root)

    app = MonitorApp(notify=notify)
    _MainWindow(root, app)
    try:
        root.mainloop()
    finally:
        app.close()
    return 0