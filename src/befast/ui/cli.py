from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from befast.app import init_database, track_order
from befast.config import configure_logging
from befast.domain.tracking import OrderNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BeFast order tracking")
    subparsers = parser.add_subparsers(dest="command", required=True)

    track = subparsers.add_parser("track", help="Print the tracking view of an order")
    track.add_argument("reference", help="Order number, Shipday order id or storage key")
    track.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: %(default)s)",
    )

    init_db = subparsers.add_parser("init-db", help="Create or upgrade the order store schema")
    init_db.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy URI (defaults to DATABASE_URI or the local data directory)",
    )

    serve = subparsers.add_parser("serve", help="Serve the tracking API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: %(default)s)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: %(default)s)")

    return parser.parse_args(list(argv))


def _serve(host: str, port: int) -> None:
    import uvicorn  # noqa: PLC0415

    uvicorn.run("befast.ui.api:create_app", factory=True, host=host, port=port)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "track" and not parsed_args.reference.strip():
            raise ValueError("Order reference must not be blank")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "track":
            payload = track_order(parsed_args.reference)
            print(json.dumps(payload, indent=parsed_args.indent, ensure_ascii=False))  # noqa: T201
        elif parsed_args.command == "init-db":
            init_database(database_uri=parsed_args.database_uri)
        elif parsed_args.command == "serve":
            _serve(parsed_args.host, parsed_args.port)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except OrderNotFoundError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
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
