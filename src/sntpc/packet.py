from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from .constants import NTP_PACKET_SIZE, NTP_VERSION, PACKET_FORMAT
from .timestamp import Timestamp


class Mode(enum.IntEnum):
    RESERVED = 0
    CLIENT = 3
    SERVER = 4


class Leap(enum.IntEnum):
    NO_WARNING = 0
    LAST_MINUTE_61S = 1
    LAST_MINUTE_59S = 2
    UNSYNCHRONIZED = 3

    @property
    def description(self) -> str:
        return _LEAP_DESCRIPTIONS[self]


_LEAP_DESCRIPTIONS = {
    Leap.NO_WARNING: "No leap",
    Leap.LAST_MINUTE_61S: "Last minute has 61 seconds",
    Leap.LAST_MINUTE_59S: "Last minute has 59 seconds",
    Leap.UNSYNCHRONIZED: "Unknown (clock unsynchronized)",
}

_RANGES = {
    "flags": (0, 0xFF),
    "stratum": (0, 0xFF),
    "poll": (-128, 127),
    "precision": (-128, 127),
    "root_delay": (0, 0xFFFFFFFF),
    "root_dispersion": (0, 0xFFFFFFFF),
    "ref_id": (0, 0xFFFFFFFF),
}


def pack_flags(leap: Leap, version: int, mode: Mode) -> int:
    if not 0 <= version <= 7:
        raise ValueError(f"version does not fit in 3 bits: {version}")
    return (int(leap) << 6) | (version << 3) | int(mode)


@dataclass(frozen=True, slots=True)
class Packet:
    flags: int = 0
    stratum: int = 0
    poll: int = 0
    precision: int = 0
    root_delay: int = 0
    root_dispersion: int = 0
    ref_id: int = 0
    ref_time: Timestamp = field(default_factory=Timestamp)
    org: Timestamp = field(default_factory=Timestamp)
    rec: Timestamp = field(default_factory=Timestamp)
    xmt: Timestamp = field(default_factory=Timestamp)

    def __post_init__(self) -> None:
        for name, (lo, hi) in _RANGES.items():
            value = getattr(self, name)
            if not lo <= value <= hi:
                raise ValueError(f"{name}: {value} outside valid range ({lo}-{hi})")

    @property
    def leap(self) -> Leap:
        return Leap(self.flags >> 6)

    @property
    def version(self) -> int:
        return (self.flags >> 3) & 0x7

    @property
    def mode(self) -> Mode:
        """Raises ValueError when the mode bits name no known Mode."""
        return Mode(self.flags & 0x7)

    @property
    def root_delay_seconds(self) -> float:
        return self.root_delay / 65536.0

    @property
    def root_dispersion_seconds(self) -> float:
        return self.root_dispersion / 65536.0

    @property
    def kiss_code(self) -> str | None:
        # stratum 0 replies carry an ASCII reason in the reference id
        if self.stratum != 0 or self.ref_id == 0:
            return None
        text = self.ref_id.to_bytes(4, "big").rstrip(b"\x00")
        try:
            return text.decode("ascii")
        except UnicodeDecodeError:
            return None

    def to_bytes(self) -> bytes:
        return struct.pack(
            PACKET_FORMAT,
            self.flags,
            self.stratum,
            self.poll,
            self.precision,
            self.root_delay,
            self.root_dispersion,
            self.ref_id,
            self.ref_time.raw,
            self.org.raw,
            self.rec.raw,
            self.xmt.raw,
        )

    @staticmethod
    def from_bytes(raw: bytes) -> "Packet":
        if len(raw) != NTP_PACKET_SIZE:
            raise ValueError(f"invalid packet size: expected {NTP_PACKET_SIZE}, got {len(raw)}")

        (
            flags,
            stratum,
            poll,
            precision,
            root_delay,
            root_dispersion,
            ref_id,
            ref_time,
            org,
            rec,
            xmt,
        ) = struct.unpack(PACKET_FORMAT, raw)

        return Packet(
            flags=flags,
            stratum=stratum,
            poll=poll,
            precision=precision,
            root_delay=root_delay,
            root_dispersion=root_dispersion,
            ref_id=ref_id,
            ref_time=Timestamp(ref_time),
            org=Timestamp(org),
            rec=Timestamp(rec),
            xmt=Timestamp(xmt),
        )

    @staticmethod
    def client_request(now: Timestamp | None = None) -> "Packet":
        return Packet(
            flags=pack_flags(Leap.UNSYNCHRONIZED, NTP_VERSION, Mode.CLIENT),
            xmt=now if now is not None else Timestamp.now(),
        )
