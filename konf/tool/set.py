"""Konf set action."""

import logging
import os
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from pathlib import Path
from typing import Any, cast

from konf.activation import KonfActivator
from konf.config import KonfConfig
from konf.exceptions import LatestWriteError
from konf.filesystem import Filesystem, LocalFilesystem

from .selector import PromptFunc, select_context, terminal_prompt

__all__ = [
    "SetAction",
    "resolve_konf_id",
    "set_konf",
]

_LOGGER = logging.getLogger(__name__)

LATEST_ARG = "-"

# The shell hook watches stdout for this prefix and points $KUBECONFIG at the
# path that follows. Both sides need to be changed together.
CHANGE_SIGNAL = "KUBECONFIGCHANGE:"


def resolve_konf_id(
    fs: Filesystem,
    config: KonfConfig,
    arg: str | None,
    prompt_func: PromptFunc,
) -> str:
    """Return the konf id for the command line argument of set.

    No argument starts the selection prompt, '-' selects the latest konf and
    anything else is used as the id itself.
    """
    if arg is None:
        return select_context(fs, config, prompt_func)
    if arg == LATEST_ARG:
        return KonfActivator(fs, config).recall_latest()
    return arg


def set_konf(fs: Filesystem, config: KonfConfig, konf_id: str, scope_key: str) -> Path:
    """Activate the konf for the scope and return the path of the active kubeconfig.

    Failing to record the konf as latest does not fail the activation, only
    'konf set -' will not work as expected.
    """
    activator = KonfActivator(fs, config)
    active_path = activator.activate(konf_id, scope_key)
    try:
        activator.record_latest(konf_id)
    except LatestWriteError as err:
        _LOGGER.warning("%s. As a result 'konf set -' might not work", err)
    return active_path


class SetAction:
    """Set the kubeconfig to use in the current shell."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "set",
                help="Set kubeconfig to use in current shell",
                description=(
                    "Sets the kubeconfig to use or starts the selection prompt. "
                    "Run 'set' for the selection prompt, 'set <konf id>' to set "
                    "a specific konf or 'set -' to set the last used konf."
                ),
            ),
        )
        args.add_argument(
            "konf_id",
            nargs="?",
            default=None,
            help="Id of the konf to set or '-' for the last used konf",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        konf_id: str | None,
        konf_dir: Path | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        fs = LocalFilesystem()
        config = KonfConfig.from_env(konf_dir)
        konf_id = resolve_konf_id(fs, config, konf_id, terminal_prompt)
        # The parent process is the shell that invoked konf
        active_path = set_konf(fs, config, konf_id, str(os.getppid()))
        _LOGGER.info("Setting context to '%s'", konf_id)
        print(f"{CHANGE_SIGNAL}{active_path}")
