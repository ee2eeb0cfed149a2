from __future__ import annotations

import logging
import socket
import time
from typing import Any, Tuple

from .constants import DEFAULT_PORT, NS_PER_SECOND, NTP_PACKET_SIZE, RECV_BUFSIZE
from .errors import AddressResolutionError, SocketError, UnexpectedReplyError


def parse_server(text: str, default_port: int = DEFAULT_PORT) -> Tuple[str, int]:
    """Split ``host``, ``host:port``, ``[v6]`` or ``[v6]:port`` into (host, port).

    A bare IPv6 literal (more than one colon, no brackets) carries no port.
    """
    text = text.strip()
    port_text: str | None = None

    if text.startswith("["):
        end = text.find("]")
        if end < 0:
            raise AddressResolutionError(f"Invalid server address: {text!r}")
        host, rest = text[1:end], text[end + 1 :]
        if rest:
            if not rest.startswith(":"):
                raise AddressResolutionError(f"Invalid server address: {text!r}")
            port_text = rest[1:]
    elif text.count(":") == 1:
        host, port_text = text.split(":")
    else:
        host = text

    if not host:
        raise AddressResolutionError(f"Invalid server address: {text!r}")

    if port_text is None:
        return host, default_port
    if not port_text.isdigit() or not 0 < int(port_text) <= 0xFFFF:
        raise AddressResolutionError(f"Invalid server port: {port_text!r}")
    return host, int(port_text)


def resolve(host: str, port: int) -> Tuple[int, Any]:
    """First (family, sockaddr) that getaddrinfo yields for a UDP peer."""
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressResolutionError(f"Failed to resolve {host}: {e}") from e
    if not infos:
        raise AddressResolutionError("Invalid server address")
    family, _, _, _, sockaddr = infos[0]
    return family, sockaddr


class NtpNet:
    """One UDP socket talking to exactly one server."""

    def __init__(self, sock: socket.socket, server_addr: Any):
        self.sock = sock
        self.server_addr = server_addr

    @classmethod
    def open(cls, server: str, timeout: float | None = None) -> "NtpNet":
        host, port = parse_server(server)
        family, server_addr = resolve(host, port)
        bind_host = "0.0.0.0" if family == socket.AF_INET else "::"

        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
        except OSError as e:
            raise SocketError(f"Failed to create local socket: {e}") from e

        try:
            sock.bind((bind_host, 0))
            if timeout is not None:
                sock.settimeout(timeout)
        except OSError as e:
            sock.close()
            raise SocketError(f"Failed to bind local socket: {e}") from e

        logging.debug("resolved %s to %s; bound %s", server, server_addr[:2], sock.getsockname()[:2])
        return cls(sock, server_addr)

    def send(self, data: bytes) -> None:
        try:
            self.sock.sendto(data, self.server_addr)
        except OSError as e:
            raise SocketError(f"Failed to send request: {e}") from e
        logging.debug("sent %d bytes to %s", len(data), self.server_addr[:2])

    def receive(self) -> Tuple[bytes, float]:
        """Block for one datagram; return it with the local receive time (Unix seconds)."""
        try:
            data, sender = self.sock.recvfrom(RECV_BUFSIZE)
        except TimeoutError as e:
            raise SocketError("Timed out waiting for reply") from e
        except OSError as e:
            raise SocketError(f"Failed to receive reply: {e}") from e
        t4 = time.time_ns() / NS_PER_SECOND

        if sender[:2] != self.server_addr[:2] or len(data) != NTP_PACKET_SIZE:
            logging.debug("unexpected datagram: %d bytes from %s", len(data), sender[:2])
            raise UnexpectedReplyError("Unexpected reply")

        logging.debug("received %d bytes from %s", len(data), sender[:2])
        return data, t4

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "NtpNet":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
