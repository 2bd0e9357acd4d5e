from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rewritesync.app import import_categories, reconcile_product_feed
from rewritesync.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile catalog URL rewrites")
    subparsers = parser.add_subparsers(dest="command", required=True)

    categories = subparsers.add_parser("categories", help="Import a category feed")
    categories.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON Lines file with one category per line",
    )

    reconcile = subparsers.add_parser("reconcile", help="Reconcile product rewrites")
    reconcile.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON Lines file with one product per line",
    )
    reconcile.add_argument(
        "--limit",
        type=int,
        help="Maximum number of products to reconcile",
    )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if not args.input.is_file():
        raise ValueError(f"Input file not found: {args.input}")
    if getattr(args, "limit", None) is not None and args.limit < 0:
        raise ValueError("Limit must be non-negative")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "categories":
            import_categories(parsed_args.input)
        elif parsed_args.command == "reconcile":
            result = reconcile_product_feed(parsed_args.input, limit=parsed_args.limit)
            summary = result.summary
            log.info(
                "Rewrite reconciliation finished: processed=%s, failed=%s, created=%s, "
                "updated=%s, redirected=%s",
                result.processed,
                result.failed,
                summary.created,
                summary.merged,
                summary.redirected,
            )
            for failure in result.failures:
                log.error(
                    "Product %s (%s) failed: %s",
                    failure.sku,
                    failure.entity_id,
                    failure.error,
                )
            if result.failed:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
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
