"""Command line interface for the ParkOS payment profile store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from . import __version__
from .codecs import PaymentProfile
from .commands import (
    LOAD_PAYMENT_PROFILE,
    SAVE_PAYMENT_PROFILE,
    CommandError,
    CommandRegistry,
    register_profile_commands,
)
from .config import CODECS, AppConfig
from .errors import ProfileStoreError
from .log_utils import mask_secret
from .store import ProfileStore
from .validation import build_payment_details_validation_error, validate_stored_payment_details


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="parkos-profile", description="Inspect or update the stored payment profile.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--data-dir", type=str, default=None, help="Use this directory instead of the app data directory")
    ap.add_argument("--codec", type=str, default=None, choices=CODECS, help="Record representation (default: typed)")
    ap.add_argument("-v", "--verbose", action="store_true")

    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("path", help="Print the resolved profile file path")

    p_show = sub.add_parser("show", help="Print the stored profile")
    p_show.add_argument("--reveal", action="store_true", help="Do not mask the card number")

    p_save = sub.add_parser("save", help="Overwrite the stored profile")
    p_save.add_argument("--card-number", type=str, default=None)
    p_save.add_argument("--card-expiration", type=str, default=None)
    p_save.add_argument("--zip-code", type=str, default=None)
    p_save.add_argument("--license", type=str, default=None)
    p_save.add_argument("--json", dest="json_text", type=str, default=None, help="Raw JSON record (opaque codec)")

    sub.add_parser("check", help="Validate the stored profile fields")
    return ap


def _as_dict(record: Any) -> Any:
    if isinstance(record, PaymentProfile):
        return record.to_dict()
    return record


def main(argv: Optional[List[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    try:
        cfg = AppConfig.from_env(data_dir=args.data_dir, codec=args.codec)
    except ValueError as exc:
        ap.error(str(exc))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        store = ProfileStore(path_provider=cfg.path_provider(), codec=cfg.make_codec())
    except ValueError as exc:
        ap.error(str(exc))

    registry = register_profile_commands(CommandRegistry(), store)

    try:
        if args.command == "path":
            print(store.path())
            return 0

        if args.command == "show":
            record = _as_dict(store.load())
            if record is None:
                print("no profile saved")
                return 0
            if not args.reveal and isinstance(record, dict) and isinstance(record.get("cardNumber"), str):
                record = dict(record, cardNumber=mask_secret(record["cardNumber"]))
            print(json.dumps(record, indent=2, sort_keys=True, ensure_ascii=False))
            return 0

        if args.command == "save":
            if args.json_text is not None:
                if cfg.codec != "opaque":
                    ap.error("--json requires --codec opaque")
                store.save(args.json_text)
            else:
                registry.invoke(
                    SAVE_PAYMENT_PROFILE,
                    profile={
                        "cardNumber": args.card_number or "",
                        "cardExpiration": args.card_expiration or "",
                        "zipCode": args.zip_code or "",
                        "license": args.license or "",
                    },
                )
            print(f"Saved payment profile to: {store.path()}")
            return 0

        if args.command == "check":
            profile = registry.invoke(LOAD_PAYMENT_PROFILE)
            if profile is None:
                print("no profile saved")
                return 1
            result = validate_stored_payment_details(profile)
            payload = build_payment_details_validation_error(result.missing_fields, result.invalid_fields)
            if payload is not None:
                print(json.dumps(payload, indent=2))
                return 1
            print("ok")
            return 0
    except (CommandError, ProfileStoreError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    ap.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
