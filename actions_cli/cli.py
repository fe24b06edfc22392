"""CLI entry point for the GitHub Actions client."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from actions_cli.commands import Handler, artifacts, repos, runs, secrets, workflows
from actions_cli.config import ActionsConfig
from actions_cli.github.client import GitHubActionsClient

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all command groups."""
    parser = argparse.ArgumentParser(
        prog="actions",
        description=(
            "GitHub Actions CLI. A GITHUB_TOKEN env variable is required "
            "to authenticate with GitHub's Actions API."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more details to stderr (repeat for debug output)",
    )
    subparsers = parser.add_subparsers(dest="group", required=True)
    for group in (artifacts, repos, runs, secrets, workflows):
        group.register(subparsers)
    return parser


async def run(handler: Handler, args: argparse.Namespace) -> int:
    """Run a command handler and return exit code."""
    log = logging.getLogger("actions_cli")

    try:
        config = ActionsConfig.from_env()
        async with GitHubActionsClient.from_config(config) as client:
            await handler(client, args)
    except Exception as exc:
        log.debug("Command failed", exc_info=exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(asyncio.run(run(args.handler, args)))


if __name__ == "__main__":  # pragma: no cover
    main()
