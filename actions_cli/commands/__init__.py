"""CLI command groups."""

import argparse
import os
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeAlias

from actions_cli.github.client import GitHubActionsClient

Handler: TypeAlias = Callable[[GitHubActionsClient, argparse.Namespace], Awaitable[None]]
Subparsers: TypeAlias = "argparse._SubParsersAction[argparse.ArgumentParser]"


def one_of(choices: Sequence[str]) -> Callable[[str], str]:
    """Argument type accepting only ``choices``.

    argparse only checks ``choices`` for command-line values; string
    defaults go through ``type``.
    """

    def parse(value: str) -> str:
        if value not in choices:
            raise argparse.ArgumentTypeError(
                f"{value} is not a supported value, "
                f"try {' or '.join(repr(choice) for choice in choices)} instead"
            )
        return value

    return parse


def add_env_argument(
    parser: argparse.ArgumentParser,
    *flags: str,
    env: str,
    help_text: str,
    required: bool = True,
    default: str | None = None,
    choices: Sequence[str] | None = None,
    **kwargs: Any,
) -> None:
    """Add an option that falls back to an environment variable.

    Values taken from the environment are validated against ``choices`` like
    command-line values, when the command is parsed.
    """
    default = os.environ.get(env, default)
    if choices is not None:
        kwargs.update(type=one_of(choices), choices=choices)
    parser.add_argument(
        *flags,
        default=default,
        required=required and default is None,
        help=f"{help_text} [env: {env}]",
        **kwargs,
    )


def add_repository_argument(parser: argparse.ArgumentParser) -> None:
    add_env_argument(
        parser,
        "-r",
        "--repository",
        env="ACTIONS_REPOSITORY",
        help_text="GitHub repository in the form owner/repo",
    )


def add_workflow_argument(
    parser: argparse.ArgumentParser, *, required: bool = False
) -> None:
    add_env_argument(
        parser,
        "-w",
        "--workflow",
        env="ACTIONS_WORKFLOW",
        required=required,
        help_text="Workflow name, matched case-insensitively as a substring",
    )


def add_since_argument(parser: argparse.ArgumentParser) -> None:
    add_env_argument(
        parser,
        "-s",
        "--since",
        env="ACTIONS_SINCE",
        required=False,
        help_text="Since date in yyyy-mm-dd format (default: first of the month)",
    )
