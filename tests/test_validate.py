from __future__ import annotations

import pytest

from sntpc.errors import InvalidReplyContentError
from sntpc.packet import Leap, Mode, Packet, pack_flags
from sntpc.timestamp import Timestamp
from sntpc.validate import check_reply, discard_reasons, should_discard


def test_good_reply_accepted(make_reply):
    request = Packet.client_request()
    reply = make_reply(request)
    assert discard_reasons(reply, request) == []
    assert not should_discard(reply, request)
    check_reply(reply, request)


def test_stratum_zero_rejected(make_reply):
    reply = make_reply(stratum=0, ref_id=int.from_bytes(b"DENY", "big"))
    assert should_discard(reply)
    with pytest.raises(InvalidReplyContentError, match="DENY"):
        check_reply(reply)


@pytest.mark.parametrize("mode", [Mode.CLIENT, Mode.RESERVED])
def test_wrong_mode_rejected(make_reply, mode):
    reply = make_reply(flags=pack_flags(Leap.NO_WARNING, 4, mode))
    assert should_discard(reply)


def test_undecodable_mode_rejected(make_reply):
    reply = make_reply(flags=(4 << 3) | 5)
    assert discard_reasons(reply) == ["unknown mode 5"]


@pytest.mark.parametrize("name", ["org", "rec", "xmt"])
def test_unset_timestamp_rejected(make_reply, name):
    reply = make_reply(**{name: Timestamp(0)})
    assert discard_reasons(reply) == [f"{name} timestamp is unset"]
    with pytest.raises(InvalidReplyContentError):
        check_reply(reply)


def test_unset_reference_time_is_fine(make_reply):
    assert not should_discard(make_reply(ref_time=Timestamp(0)))


def test_originate_must_echo_request(make_reply):
    request = Packet.client_request(Timestamp.from_unix_ns(1_700_000_000_000_000_000))
    reply = make_reply(org=Timestamp.from_unix_ns(1_600_000_000_000_000_000))
    assert not should_discard(reply)
    assert should_discard(reply, request)


def test_all_reasons_reported(make_reply):
    reply = make_reply(flags=pack_flags(Leap.NO_WARNING, 4, Mode.CLIENT), stratum=0, xmt=Timestamp(0))
    assert len(discard_reasons(reply)) == 3
