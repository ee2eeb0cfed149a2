"""Minimal SNTP unicast client.

Sends one NTPv4 client request to a single server, validates the reply and
reports the clock offset and round-trip delay. The local clock is never
adjusted; the caller decides what to do with the estimate.
"""

from .client import SntpClient
from .errors import (
    AddressResolutionError,
    InvalidReplyContentError,
    NtpError,
    SocketError,
    TimestampDecodeError,
    UnexpectedReplyError,
)
from .offset import SyncResult
from .packet import Leap, Mode, Packet
from .timestamp import Timestamp

__all__ = [
    "SntpClient",
    "SyncResult",
    "Packet",
    "Timestamp",
    "Mode",
    "Leap",
    "NtpError",
    "AddressResolutionError",
    "SocketError",
    "UnexpectedReplyError",
    "InvalidReplyContentError",
    "TimestampDecodeError",
]
