from __future__ import annotations

import argparse
import json
import logging
import sys

from .client import SntpClient
from .constants import DEFAULT_TIMEOUT_S
from .errors import NtpError

EXIT_OK = 0
EXIT_NTP_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sntpc", description="Query one SNTP server and report the clock offset.")
    p.add_argument("server", help="server host or address, optionally host:port or [v6]:port")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    p.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_S,
        help="seconds to wait for the reply (default: wait forever)",
    )
    p.add_argument("--json", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        client = SntpClient(args.server, timeout=args.timeout)
    except NtpError as e:
        print("Failed to initialize the SNTP client", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_NTP_ERROR

    with client:
        try:
            result = client.sync()
        except NtpError as e:
            print("Query failed", file=sys.stderr)
            print(e, file=sys.stderr)
            return EXIT_NTP_ERROR

    print(json.dumps(result.to_dict(), indent=2) if args.json else result)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
