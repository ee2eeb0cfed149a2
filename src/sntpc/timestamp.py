from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .constants import FRACTION_SCALE, NS_PER_SECOND, NTP_TO_UNIX_SECONDS, TIMESTAMP_FORMAT

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MAX_RAW = (1 << 64) - 1


@dataclass(frozen=True, slots=True)
class Timestamp:
    """NTP 64-bit fixed point time: seconds since 1900 in the high word,
    binary fraction of a second in the low word.

    A raw value of 0 means "unset" and never decodes to an instant.
    """

    raw: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= _MAX_RAW:
            raise ValueError(f"timestamp out of range: {self.raw:#x}")

    @property
    def seconds(self) -> int:
        return self.raw >> 32

    @property
    def fraction(self) -> int:
        return self.raw & 0xFFFFFFFF

    @property
    def is_unset(self) -> bool:
        return self.raw == 0

    @classmethod
    def now(cls) -> "Timestamp":
        # the seconds field rolls over into era 1 on 2036-02-07
        return cls.from_unix_ns(time.time_ns(), wrap=True)

    @classmethod
    def from_unix_ns(cls, unix_ns: int, wrap: bool = False) -> "Timestamp":
        unix_sec, nanos = divmod(unix_ns, NS_PER_SECOND)
        sec = unix_sec + NTP_TO_UNIX_SECONDS
        if wrap:
            sec &= 0xFFFFFFFF
        elif not 0 <= sec <= 0xFFFFFFFF:
            raise ValueError(f"instant not representable in NTP era 0: {unix_ns} ns")
        frac = (nanos * FRACTION_SCALE) // NS_PER_SECOND
        return cls((sec << 32) | frac)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        if dt.tzinfo is None:
            raise ValueError("naive datetime; attach a timezone")
        delta = dt - _UNIX_EPOCH
        unix_ns = (delta.days * 86_400 + delta.seconds) * NS_PER_SECOND + delta.microseconds * 1_000
        return cls.from_unix_ns(unix_ns)

    def to_unix_ns(self) -> int | None:
        sec = self.seconds
        if sec < NTP_TO_UNIX_SECONDS:
            return None
        nanos = (self.fraction * NS_PER_SECOND + FRACTION_SCALE // 2) >> 32
        return (sec - NTP_TO_UNIX_SECONDS) * NS_PER_SECOND + nanos

    def to_unix_seconds(self) -> float | None:
        unix_ns = self.to_unix_ns()
        if unix_ns is None:
            return None
        return unix_ns / NS_PER_SECOND

    def decode(self) -> datetime | None:
        """Calendar instant in UTC, truncated to microseconds."""
        unix_ns = self.to_unix_ns()
        if unix_ns is None:
            return None
        return _UNIX_EPOCH + timedelta(microseconds=unix_ns // 1_000)

    def to_bytes(self) -> bytes:
        return struct.pack(TIMESTAMP_FORMAT, self.raw)

    @staticmethod
    def from_bytes(raw: bytes) -> "Timestamp":
        if len(raw) != struct.calcsize(TIMESTAMP_FORMAT):
            raise ValueError(f"timestamp must be 8 bytes, got {len(raw)}")
        (value,) = struct.unpack(TIMESTAMP_FORMAT, raw)
        return Timestamp(value)
