"""Repositories using GitHub Actions."""

import argparse
import sys

from actions_cli.aggregators import group_repos
from actions_cli.commands import Subparsers, add_env_argument
from actions_cli.github.client import GitHubActionsClient
from actions_cli.output import TableWriter


async def list_repos(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Print the repositories of an organization declaring workflows."""
    hits = client.search_workflow_files(args.org)
    repos = await group_repos(hits)
    hits.raise_for_failure()

    writer = TableWriter(stream=sys.stdout)
    writer.writerow(["Repo", "Workflow Count"])
    for repo in repos:
        writer.writerow([repo.full_name, len(repo.workflows)])
    writer.flush()


def register(subparsers: Subparsers) -> None:
    parser = subparsers.add_parser("repos", help="Repos using GitHub Actions")
    add_env_argument(
        parser,
        "-o",
        "--org",
        env="ACTIONS_ORG",
        help_text="GitHub organization to search",
    )
    parser.set_defaults(handler=list_repos)
