"""Konf shell completion action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from pathlib import Path
from typing import cast

from konf.config import KonfConfig
from konf.exceptions import EmptyStoreError
from konf.filesystem import Filesystem, LocalFilesystem
from konf.store import fetch_konfs

__all__ = [
    "CompleteAction",
    "complete_set",
]

_LOGGER = logging.getLogger(__name__)


def complete_set(fs: Filesystem, config: KonfConfig, to_complete: str) -> list[str]:
    """Return the konf ids that may be passed to set.

    All ids are returned regardless of the partial input, as the shell takes care
    of matching them. An empty store results in no suggestions rather than an
    error, so the shell does not report one while completing.
    """
    _LOGGER.debug("Completing '%s'", to_complete)
    try:
        konfs = fetch_konfs(fs, config)
    except EmptyStoreError:
        return []
    return [konf.konf_id for konf in konfs]


class CompleteAction:
    """Print shell completion candidates."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "complete",
                help="Print completion candidates for 'set'",
                description=(
                    "Print the konf ids accepted by 'set', one per line, for use "
                    "by shell completion scripts"
                ),
            ),
        )
        args.add_argument(
            "to_complete",
            nargs="?",
            default="",
            help="The partial konf id being completed",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        to_complete: str,
        konf_dir: Path | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        config = KonfConfig.from_env(konf_dir)
        for konf_id in complete_set(LocalFilesystem(), config, to_complete):
            print(konf_id)
