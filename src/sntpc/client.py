from __future__ import annotations

import logging

from .constants import DEFAULT_TIMEOUT_S
from .net import NtpNet
from .offset import SyncResult, compute_result
from .packet import Packet
from .validate import check_reply


class SntpClient:
    """Unicast SNTP client bound to a single server.

    Construction resolves the server and binds the socket; failures there
    propagate from the constructor. Each ``sync()`` does one request/reply
    exchange with no retry, and a failed call leaves the client usable.
    """

    def __init__(self, server: str, timeout: float | None = DEFAULT_TIMEOUT_S, net: NtpNet | None = None):
        self.server = server
        self.net = net or NtpNet.open(server, timeout=timeout)

    def sync(self) -> SyncResult:
        request = Packet.client_request()
        self.net.send(request.to_bytes())

        raw, t4 = self.net.receive()
        # receive() only hands back datagrams of exactly NTP_PACKET_SIZE
        reply = Packet.from_bytes(raw)

        check_reply(reply, request)
        result = compute_result(reply, t4)
        logging.info("%s: offset=%.6fs delay=%.6fs stratum=%d", self.server, result.offset, result.delay, reply.stratum)
        return result

    def close(self) -> None:
        self.net.close()

    def __enter__(self) -> "SntpClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
