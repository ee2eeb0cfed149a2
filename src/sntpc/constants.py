from __future__ import annotations

NTP_VERSION = 4
NTP_PACKET_SIZE = 48
# flags, stratum, poll, precision, root delay, root dispersion, refid,
# reference, originate, receive, transmit
PACKET_FORMAT = "!BBbbIIIQQQQ"
TIMESTAMP_FORMAT = "!Q"

# seconds from 1900-01-01 (NTP epoch) to 1970-01-01 (Unix epoch)
NTP_TO_UNIX_SECONDS = 2_208_988_800
FRACTION_SCALE = 1 << 32
NS_PER_SECOND = 1_000_000_000

DEFAULT_PORT = 123
DEFAULT_TIMEOUT_S: float | None = None
RECV_BUFSIZE = 1024
