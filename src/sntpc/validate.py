"""Sanity rules a server reply must pass before its timestamps are used."""
from __future__ import annotations

import logging

from .errors import InvalidReplyContentError
from .packet import Mode, Packet


def discard_reasons(reply: Packet, request: Packet | None = None) -> list[str]:
    reasons: list[str] = []

    try:
        mode = reply.mode
    except ValueError:
        reasons.append(f"unknown mode {reply.flags & 0x7}")
    else:
        if mode != Mode.SERVER:
            reasons.append(f"mode is {mode.name.lower()}, expected server")

    if reply.stratum == 0:
        kiss = reply.kiss_code
        reasons.append(f"stratum 0 (kiss code {kiss})" if kiss else "stratum 0")

    for name in ("org", "rec", "xmt"):
        if getattr(reply, name).is_unset:
            reasons.append(f"{name} timestamp is unset")

    if request is not None and not reply.org.is_unset and reply.org != request.xmt:
        reasons.append("originate timestamp does not match request")

    return reasons


def should_discard(reply: Packet, request: Packet | None = None) -> bool:
    return bool(discard_reasons(reply, request))


def check_reply(reply: Packet, request: Packet | None = None) -> None:
    reasons = discard_reasons(reply, request)
    if reasons:
        logging.debug("discarding reply: %s", "; ".join(reasons))
        raise InvalidReplyContentError("Incorrect server reply content, discarded: " + "; ".join(reasons))
