from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from billsplit.config import get_settings
from billsplit.logging import configure_logging, get_logger
from billsplit.services.calculation import calculate_bill
from billsplit.services.items import OrphanedItemError
from billsplit.services.snapshot import bill_from_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billsplit",
        description="Split a bill snapshot (JSON) into exact per-participant totals.",
    )
    parser.add_argument("snapshot", nargs="?", default="-", help="path to the bill JSON, '-' for stdin")
    parser.add_argument("--public", action="store_true", help="print only participant totals and grand total")
    parser.add_argument("--wallet-balance", type=int, default=None, help="owner wallet balance in cents")
    parser.add_argument("--no-raw", action="store_true", help="skip the exact-value strings")
    return parser


def load_snapshot(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def reject(log: Any, message: str) -> int:
    log.info("cli.rejected", error=message)
    print(message, file=sys.stderr)
    return 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    log = get_logger(__name__)

    try:
        data = load_snapshot(args.snapshot)
    except (OSError, json.JSONDecodeError) as exc:
        return reject(log, f"cannot read bill snapshot: {exc}")

    try:
        bill = bill_from_dict(data)
        result = calculate_bill(
            bill,
            settings.base_fee_cents,
            settings.ai_cents,
            include_raw=not args.no_raw,
            raw_decimals=settings.raw_decimals,
            locale=settings.locale,
            currency=settings.currency,
        )
    except (OrphanedItemError, ValidationError) as exc:
        return reject(log, str(exc))

    payload = result.public_summary() if args.public else result.to_dict()
    if args.wallet_balance is not None:
        payload["platform_fee_due"] = result.platform_fee_due(args.wallet_balance)

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
