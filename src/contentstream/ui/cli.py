from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from contentstream.app import (
    content_exists,
    delete_content,
    load_content,
    store_content,
    verify_store,
)
from contentstream.config import configure_logging
from contentstream.domain.digest import is_address

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from contentstream.domain.model import JSONValue

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage off-chain content")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    put = subparsers.add_parser("put", help="Store JSON content and print its address")
    put.add_argument(
        "file",
        nargs="?",
        type=str,
        help="JSON file to store (reads stdin when omitted)",
    )

    get = subparsers.add_parser("get", help="Print the content stored at an address")
    get.add_argument("address", type=str)

    exists = subparsers.add_parser("exists", help="Exit 0 when an address is stored")
    exists.add_argument("address", type=str)

    delete = subparsers.add_parser("delete", help="Remove the payload stored at an address")
    delete.add_argument("address", type=str)

    subparsers.add_parser("verify", help="Re-hash every stored payload")

    return parser.parse_args(list(argv))


def _validate_address(value: str) -> str:
    if not is_address(value):
        raise ValueError(f"Not a content address: {value}")
    return value


def _read_content(file: str | None) -> JSONValue:
    raw = Path(file).read_text(encoding="utf-8") if file else sys.stdin.read()
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON input: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        if parsed_args.command in {"get", "exists", "delete"}:
            _validate_address(parsed_args.address)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "put":
            print(store_content(_read_content(parsed_args.file)))  # noqa: T201
        elif parsed_args.command == "get":
            content = load_content(parsed_args.address)
            print(json.dumps(content, indent=2, ensure_ascii=False))  # noqa: T201
        elif parsed_args.command == "exists":
            if not content_exists(parsed_args.address):
                sys.exit(1)
        elif parsed_args.command == "delete":
            if not delete_content(parsed_args.address):
                sys.exit(1)
        elif parsed_args.command == "verify":
            report = verify_store()
            for address in report.corrupted:
                print(address)  # noqa: T201
            if not report.ok:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
