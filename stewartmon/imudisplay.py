"""Text readout of the latest accelerometer and gyroscope values."""

from __future__ import annotations

ACCEL_SCALE = 0.000565
ACCEL_UNIT = "m/s²"
GYRO_UNIT = "°/s"
INITIAL_TEXT = "0.00"

ACCEL_NAMES = ("Accel X", "Accel Y", "Accel Z")
GYRO_NAMES = ("Gyro X", "Gyro Y", "Gyro Z")


def format_accel(raw: float) -> str:
    """Scale a raw accelerometer reading to m/s² with two decimals."""
    return f"{raw * ACCEL_SCALE:.2f}"


def format_gyro(raw: float) -> str:
    """Format a gyroscope reading in °/s with no decimals."""
    return f"{raw:.0f}"


class ImuReadout:
    """Holds the displayed text for the six IMU axes."""

    def __init__(self) -> None:
        self.title = "IMU Data"
        self._accel = [INITIAL_TEXT] * len(ACCEL_NAMES)
        self._gyro = [INITIAL_TEXT] * len(GYRO_NAMES)

    def update(
        self,
        ax: float,
        ay: float,
        az: float,
        gx: float,
        gy: float,
        gz: float,
    ) -> None:
        """Replace the shown values with a new set of raw readings."""
        self._accel = [format_accel(v) for v in (ax, ay, az)]
        self._gyro = [format_gyro(v) for v in (gx, gy, gz)]

    def rows(self) -> list[tuple[str, str, str]]:
        """(name, value text, unit) for each axis, accelerometer first."""
        accel = [(n, v, ACCEL_UNIT) for n, v in zip(ACCEL_NAMES, self._accel)]
        gyro = [(n, v, GYRO_UNIT) for n, v in zip(GYRO_NAMES, self._gyro)]
        return accel + gyro