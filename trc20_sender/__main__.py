"""Command-line entry point: send one TRC20 transfer.

The private key is read from ``TRC20_PRIVATE_KEY``, never from argv,
so it does not end up in shell history or process listings.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

from trc20_sender import log
from trc20_sender.config import TransferConfig
from trc20_sender.sender import TransferSender


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trc20-sender",
        description="Send a TRC20 token transfer (key from TRC20_PRIVATE_KEY).",
    )
    parser.add_argument("--to", required=True, help="Recipient address (T...)")
    parser.add_argument("--amount", required=True, help="Amount in tokens, e.g. 10.5")
    parser.add_argument("--log-level", default=None, help="Log level (default: TRC20_LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log.configure(args.log_level)

    private_key = os.environ.get("TRC20_PRIVATE_KEY")
    if not private_key:
        print("TRC20_PRIVATE_KEY is not set", file=sys.stderr)
        return 2

    try:
        config = TransferConfig.from_env()
    except ValueError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2

    result = asyncio.run(TransferSender(config).handle(private_key, args.to, args.amount))
    print(json.dumps(result.to_dict()))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
