from __future__ import annotations


class NtpError(Exception):
    """Base class for every failure reported by the SNTP client."""


class AddressResolutionError(NtpError):
    pass


class SocketError(NtpError):
    pass


class UnexpectedReplyError(NtpError):
    """A datagram came from the wrong peer or had the wrong size."""


class InvalidReplyContentError(NtpError):
    pass


class TimestampDecodeError(NtpError):
    pass
