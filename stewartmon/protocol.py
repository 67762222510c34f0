"""Line protocol spoken by the platform controller over the serial link.

Two kinds of line are understood::

    IMU:<id>,<ax>,<ay>,<az>,<gx>,<gy>,<gz>*<crc>
    S:<a0>,<a1>,<a2>,<a3>,<a4>,<a5>*<crc>

The checksum is a CRC-8 (polynomial 0x31, initial value 0xFF) over the
little-endian 16-bit encoding of the sensor or servo values, written as two
hexadecimal digits.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

_WHITESPACE = " \t\n\v\f\r"
_WHITESPACE_BYTES = _WHITESPACE.encode("ascii")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)[ \t\n\v\f\r]*")
_HEX_RE = re.compile(r"[ \t\n\v\f\r]*([0-9A-Fa-f]+)[ \t\n\v\f\r]*")

_CRC_INIT = 0xFF
_CRC_POLY = 0x31

_IMU_PREFIX = "IMU:"
_SERVO_PREFIX = "S:"
_IMU_FIELDS = 7
_SERVO_FIELDS = 6

Field = Union[str, bytes, int]


class ProtocolError(ValueError):
    """Raised when a line cannot be decoded."""


@dataclass(frozen=True)
class ImuSample:
    """Raw accelerometer and gyroscope readings from one IMU."""

    imu_id: int
    ax: int
    ay: int
    az: int
    gx: int
    gy: int
    gz: int


@dataclass(frozen=True)
class ServoSample:
    """Angles, in degrees, of the six platform servos."""

    angles: tuple[int, ...]


def _to_text(value: Union[str, bytes]) -> str:
    return value.decode("latin-1") if isinstance(value, (bytes, bytearray)) else value


def _to_int(field: Field) -> int:
    """Parse a decimal 32-bit integer, allowing surrounding whitespace."""
    if isinstance(field, int):
        return field
    text = _to_text(field)
    match = _INT_RE.fullmatch(text)
    if match is None:
        raise ProtocolError(f"not an integer: {text!r}")
    value = int(match.group(1))
    if not -(2**31) <= value < 2**31:
        raise ProtocolError(f"integer out of range: {text!r}")
    return value


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def crc8(values: Iterable[Field]) -> int:
    """Return the CRC-8 of the values, each taken as a little-endian int16."""
    crc = _CRC_INIT
    for field in values:
        value = _to_int(field)
        for byte in (value & 0xFF, (value >> 8) & 0xFF):
            crc ^= byte
            for _ in range(8):
                crc = ((crc << 1) ^ _CRC_POLY) if crc & 0x80 else (crc << 1)
                crc &= 0xFF
    return crc


def _parse_crc(part: str) -> int:
    match = _HEX_RE.fullmatch(part)
    if match is None or len(part) != 2:
        raise ProtocolError(f"invalid CRC format: {part!r}")
    return int(match.group(1), 16)


def _split_checked(text: str, prefix: str, expected: int, crc_from: int) -> list[str]:
    crc_pos = text.rindex("*")
    fields = text[len(prefix):crc_pos].split(",")
    received = _parse_crc(text[crc_pos + 1:])
    if len(fields) != expected:
        raise ProtocolError(
            f"expected {expected} fields, got {len(fields)}: {text!r}"
        )
    calculated = crc8(fields[crc_from:])
    if received != calculated:
        raise ProtocolError(
            f"CRC mismatch: received {received:#04x}, calculated {calculated:#04x}"
        )
    return fields


def parse_line(line: Union[str, bytes]) -> Union[ImuSample, ServoSample, None]:
    """Decode one line; return None for a blank line.

    Raises ProtocolError for malformed, corrupted or unrecognised lines.
    """
    text = _to_text(line).strip(_WHITESPACE)
    if not text:
        return None

    if text.startswith(_IMU_PREFIX) and "*" in text:
        fields = _split_checked(text, _IMU_PREFIX, _IMU_FIELDS, crc_from=1)
        imu_id = _to_int(fields[0])
        ax, ay, az, gx, gy, gz = (_to_int16(_to_int(f)) for f in fields[1:])
        return ImuSample(imu_id, ax, ay, az, gx, gy, gz)

    if text.startswith(_SERVO_PREFIX) and "*" in text:
        fields = _split_checked(text, _SERVO_PREFIX, _SERVO_FIELDS, crc_from=0)
        return ServoSample(tuple(_to_int(f) for f in fields))

    raise ProtocolError(f"unrecognized line: {text!r}")


class LineSplitter:
    """Reassembles newline-terminated lines from chunks of a byte stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes received that do not yet form a complete line."""
        return bytes(self._buffer)

    def feed(self, data: bytes) -> list[bytes]:
        """Add data and return the complete, trimmed, non-empty lines."""
        self._buffer += data
        lines = []
        while (end := self._buffer.find(b"\n")) != -1:
            line = bytes(self._buffer[:end]).strip(_WHITESPACE_BYTES)
            del self._buffer[:end + 1]
            if line:
                lines.append(line)
        return lines