"""Platform orientation from accelerometer data and a ball rolling on it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

ACCEL_ONE_G = 17000.0
MAX_TILT_DEGREES = 90.0

TIME_STEP = 0.016
FRICTION = 0.98
BALL_RADIUS = 0.5
PLATFORM_TOP = 0.25
PLATFORM_HALF_X = 2.5
PLATFORM_HALF_Z = 1.5
DEFAULT_GRAVITY = 9.8


@dataclass(frozen=True)
class Vector3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3:
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vector3()
        return self * (1.0 / length)


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion with scalar part w."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def from_euler_angles(pitch: float, yaw: float, roll: float) -> Quaternion:
        """Rotation by roll about Z, then pitch about X, then yaw about Y (degrees)."""
        half_pitch = math.radians(pitch) * 0.5
        half_yaw = math.radians(yaw) * 0.5
        half_roll = math.radians(roll) * 0.5
        c1, s1 = math.cos(half_yaw), math.sin(half_yaw)
        c2, s2 = math.cos(half_roll), math.sin(half_roll)
        c3, s3 = math.cos(half_pitch), math.sin(half_pitch)
        c1c2 = c1 * c2
        s1s2 = s1 * s2
        return Quaternion(
            w=c1c2 * c3 + s1s2 * s3,
            x=c1c2 * s3 + s1s2 * c3,
            y=s1 * c2 * c3 - c1 * s2 * s3,
            z=c1 * s2 * c3 - s1 * c2 * s3,
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        return Quaternion(
            w=self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            x=self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            y=self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            z=self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def conjugated(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def rotate(self, vector: Vector3) -> Vector3:
        """Rotate a vector by this (unit) quaternion."""
        result = self * Quaternion(0.0, vector.x, vector.y, vector.z) * self.conjugated()
        return Vector3(result.x, result.y, result.z)


def orientation_from_accel(ax: float, ay: float) -> Quaternion:
    """Platform tilt from raw accelerometer X (roll) and Y (pitch)."""
    norm_x = min(max(ax / ACCEL_ONE_G, -1.0), 1.0)
    norm_y = min(max(ay / ACCEL_ONE_G, -1.0), 1.0)
    roll = norm_x * MAX_TILT_DEGREES
    pitch = norm_y * MAX_TILT_DEGREES
    return Quaternion.from_euler_angles(pitch, 0.0, roll)


def _initial_ball_position() -> Vector3:
    return Vector3(0.0, 2.0, 0.0)


@dataclass
class PlatformSimulation:
    """A tilting rectangular platform with a ball sliding on or falling off it."""

    gravity: float = DEFAULT_GRAVITY
    rotation: Quaternion = field(default_factory=Quaternion)
    ball_position: Vector3 = field(default_factory=_initial_ball_position)
    ball_velocity: Vector3 = field(default_factory=Vector3)

    def update_orientation(self, ax: float, ay: float, az: float) -> None:
        """Tilt the platform according to raw accelerometer readings."""
        self.rotation = orientation_from_accel(ax, ay)

    def reset_ball(self) -> None:
        """Put the ball back above the platform centre, at rest."""
        self.ball_velocity = Vector3()
        self.ball_position = _initial_ball_position()

    def _on_platform(self, pos: Vector3) -> bool:
        return (
            -PLATFORM_HALF_X + BALL_RADIUS <= pos.x <= PLATFORM_HALF_X - BALL_RADIUS
            and -PLATFORM_HALF_Z + BALL_RADIUS <= pos.z <= PLATFORM_HALF_Z - BALL_RADIUS
        )

    def step(self) -> None:
        """Advance the ball by one fixed time step."""
        normal = self.rotation.rotate(Vector3(0.0, 1.0, 0.0)).normalized()
        gravity = Vector3(0.0, -self.gravity, 0.0)

        along_surface = gravity - normal * gravity.dot(normal)
        velocity = self.ball_velocity + along_surface * TIME_STEP
        pos = self.ball_position

        surface_y: float | None = None
        if normal.y != 0.0:
            d = normal.dot(Vector3(0.0, PLATFORM_TOP, 0.0))
            surface_y = (d - normal.x * pos.x - normal.z * pos.z) / normal.y

        if (
            surface_y is not None
            and self._on_platform(pos)
            and pos.y - BALL_RADIUS <= surface_y
        ):
            pos = Vector3(pos.x, surface_y + BALL_RADIUS, pos.z)
            velocity = Vector3(velocity.x, 0.0, velocity.z)
        else:
            velocity = velocity + gravity * TIME_STEP

        velocity = Vector3(velocity.x * FRICTION, velocity.y, velocity.z * FRICTION)
        self.ball_velocity = velocity
        self.ball_position = pos + velocity * TIME_STEP