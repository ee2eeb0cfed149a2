from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Tuple

from .errors import TimestampDecodeError
from .packet import Leap, Packet


@dataclass(frozen=True, slots=True)
class SyncResult:
    estimated_time: datetime
    offset: float
    delay: float
    leap: Leap

    def to_dict(self) -> dict:
        return {
            "estimated_time": self.estimated_time.isoformat(),
            "offset": self.offset,
            "delay": self.delay,
            "leap": self.leap.description,
        }

    def __str__(self) -> str:
        return (
            f"{self.estimated_time.isoformat()} / offset: {self.offset}, "
            f"delay: {self.delay}, leap: {self.leap.description}"
        )


def offset_and_delay(t1: float, t2: float, t3: float, t4: float) -> Tuple[float, float]:
    """Four-timestamp SNTP estimate.

    t1 client send, t2 server receive, t3 server transmit, t4 client receive,
    all in seconds on a common epoch. Returns (offset, delay); either may be
    negative and nothing is clamped.
    """
    offset = ((t2 - t1) + (t3 - t4)) / 2.0
    delay = (t4 - t1) - (t3 - t2)
    return offset, delay


def compute_result(reply: Packet, t4: float, now: datetime | None = None) -> SyncResult:
    times = []
    for name in ("org", "rec", "xmt"):
        value = getattr(reply, name).to_unix_seconds()
        if value is None:
            raise TimestampDecodeError(f"Failed to decode {name} timestamp from reply")
        times.append(value)
    t1, t2, t3 = times

    offset, delay = offset_and_delay(t1, t2, t3, t4)
    base = now if now is not None else datetime.now(timezone.utc)
    return SyncResult(
        estimated_time=base + timedelta(seconds=offset),
        offset=offset,
        delay=delay,
        leap=reply.leap,
    )
