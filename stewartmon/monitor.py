"""Routes decoded serial lines to the state shown by the monitor."""

from __future__ import annotations

import logging
import time
from typing import Callable, Union

from .gforce import GForceTrace
from .hexagon import HexagonBars, servo_angle_to_value
from .imudisplay import ImuReadout
from .platform import PlatformSimulation
from .protocol import ImuSample, LineSplitter, ProtocolError, ServoSample, parse_line

logger = logging.getLogger(__name__)

ONE_G_RAW = 16390.0
PLATFORM_IMU_ID = 1
SECONDARY_IMU_ID = 2

Sample = Union[ImuSample, ServoSample]


def g_from_raw(raw: float) -> float:
    """Convert a raw accelerometer reading to units of g."""
    return raw / ONE_G_RAW


class Monitor:
    """Holds every view's state and updates it from the incoming byte stream."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.splitter = LineSplitter()
        self.readout = ImuReadout()
        self.platform = PlatformSimulation()
        self.gforce = GForceTrace(clock=clock)
        self.hexagon = HexagonBars()
        self.gforce.set_acceleration(0.0, 0.0)

    def feed(self, data: bytes) -> list[Sample]:
        """Consume a chunk of serial data; return the samples it completed."""
        samples = []
        for line in self.splitter.feed(data):
            sample = self.handle_line(line)
            if sample is not None:
                samples.append(sample)
        return samples

    def handle_line(self, line: Union[str, bytes]) -> Sample | None:
        """Apply one line; return its sample, or None if it was blank or rejected."""
        try:
            sample = parse_line(line)
        except ProtocolError as exc:
            logger.warning("%s", exc)
            return None
        if isinstance(sample, ImuSample):
            self._apply_imu(sample)
        elif isinstance(sample, ServoSample):
            self._apply_servo(sample)
        return sample

    def _apply_imu(self, sample: ImuSample) -> None:
        if sample.imu_id == PLATFORM_IMU_ID:
            self.readout.update(
                sample.ax, sample.ay, sample.az, sample.gx, sample.gy, sample.gz
            )
            self.platform.update_orientation(sample.ax, sample.ay, sample.az)
            self.gforce.set_acceleration(g_from_raw(sample.ax), g_from_raw(sample.ay))
        elif sample.imu_id == SECONDARY_IMU_ID:
            pass
        else:
            logger.warning("Unknown IMU ID: %d", sample.imu_id)

    def _apply_servo(self, sample: ServoSample) -> None:
        for index, angle in enumerate(sample.angles):
            self.hexagon.set_bar_value(index, servo_angle_to_value(angle))