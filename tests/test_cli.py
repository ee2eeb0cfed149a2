from __future__ import annotations

import json
import threading

import pytest

from sntpc.cli import EXIT_NTP_ERROR, EXIT_OK, main
from sntpc.packet import Packet


def answer_once(sock, make_reply, **overrides):
    def runner():
        data, addr = sock.recvfrom(1024)
        sock.sendto(make_reply(Packet.from_bytes(data), **overrides).to_bytes(), addr)

    t = threading.Thread(target=runner, daemon=True)
    t.start()
    return t


def test_missing_argument_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_extra_argument_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["a.example", "b.example"])
    assert exc.value.code == 2


def test_prints_summary(server_sock, server_addr, make_reply, capsys):
    t = answer_once(server_sock, make_reply)
    assert main([server_addr, "--timeout", "2"]) == EXIT_OK
    t.join(timeout=2.0)
    out = capsys.readouterr().out
    assert " / offset: " in out
    assert "leap: No leap" in out


def test_prints_json(server_sock, server_addr, make_reply, capsys):
    t = answer_once(server_sock, make_reply)
    assert main([server_addr, "--timeout", "2", "--json"]) == EXIT_OK
    t.join(timeout=2.0)
    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {"estimated_time", "offset", "delay", "leap"}


def test_query_failure_exits_nonzero(server_sock, server_addr, make_reply, capsys):
    t = answer_once(server_sock, make_reply, stratum=0)
    assert main([server_addr, "--timeout", "2"]) == EXIT_NTP_ERROR
    t.join(timeout=2.0)
    assert "Query failed" in capsys.readouterr().err


def test_init_failure_exits_nonzero(capsys):
    assert main(["host:notaport"]) == EXIT_NTP_ERROR
    assert "Failed to initialize" in capsys.readouterr().err
