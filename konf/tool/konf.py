"""Command line tool for switching between the kubeconfigs of the konf store."""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from konf.config import KONF_DIR_ENV
from konf.exceptions import KonfException
from . import complete, set as set_action

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="konf",
        description="Command line utility for managing a store of kubeconfigs.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )
    parser.add_argument(
        "--konf-dir",
        type=Path,
        default=None,
        help=f"Directory holding the konf store (default: ${KONF_DIR_ENV} or ~/.kube/konfs)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    set_action.SetAction.register(subparsers)
    complete.CompleteAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Konf command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        action.run(**vars(args))
    except KonfException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("konf error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
