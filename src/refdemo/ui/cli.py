from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from refdemo.app import seed_demo_data
from refdemo.config import ConfigurationError, configure_logging
from refdemo.domain.reconciliation import desired_state_rows

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed reference demo metadata")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every reconciliation step at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    seed = subparsers.add_parser("seed", help="Reconcile the stored metadata with the demo data")
    seed.add_argument(
        "--dry-run",
        action="store_true",
        help="Roll back instead of committing and only report what would change",
    )
    seed.add_argument(
        "--with-base-metadata",
        action="store_true",
        help="Install the prerequisite roles, sources and concepts first",
    )
    seed.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the local data dir)",
    )

    subparsers.add_parser("show-desired", help="Print the desired demo metadata")

    return parser.parse_args(list(argv))


def _show_desired() -> None:
    for kind, key, value in desired_state_rows():
        print(f"{kind:<24} {key:<40} {value}")  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "seed":
            report = seed_demo_data(
                dry_run=parsed_args.dry_run,
                with_base_metadata=parsed_args.with_base_metadata,
                database_uri=parsed_args.database_uri,
            )
            log.info("Seed finished, changes made: %s", report.changed)
        elif parsed_args.command == "show-desired":
            _show_desired()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during seed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
