from __future__ import annotations

import socket

import pytest

from sntpc.packet import Leap, Mode, Packet, pack_flags
from sntpc.timestamp import Timestamp


@pytest.fixture
def server_sock():
    """Loopback UDP socket standing in for an NTP server."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def server_addr(server_sock):
    host, port = server_sock.getsockname()
    return f"{host}:{port}"


def _reply(request: Packet | None = None, **overrides) -> Packet:
    now = Timestamp.now()
    fields = dict(
        flags=pack_flags(Leap.NO_WARNING, 4, Mode.SERVER),
        stratum=2,
        poll=6,
        precision=-20,
        root_delay=0x00000A00,
        root_dispersion=0x00001200,
        ref_id=0xC0A80001,
        ref_time=now,
        org=request.xmt if request is not None else now,
        rec=now,
        xmt=now,
    )
    fields.update(overrides)
    return Packet(**fields)


@pytest.fixture
def make_reply():
    return _reply
