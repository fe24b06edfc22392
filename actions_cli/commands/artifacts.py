"""Workflow run artifact commands."""

import argparse
import sys

from actions_cli.commands import Subparsers, add_repository_argument
from actions_cli.github.client import GitHubActionsClient
from actions_cli.output import TableWriter


async def list_artifacts(
    client: GitHubActionsClient, args: argparse.Namespace
) -> None:
    """Print the artifacts of a workflow run."""
    writer = TableWriter(stream=sys.stdout)
    writer.writerow(["Id", "Name", "Size"])
    artifacts = client.artifacts(args.repository, args.run_id)
    async for artifact in artifacts:
        writer.writerow([artifact.id, artifact.name, artifact.size_in_bytes])
    writer.flush()
    artifacts.raise_for_failure()


async def delete_artifact(
    client: GitHubActionsClient, args: argparse.Namespace
) -> None:
    """Delete a workflow run artifact."""
    await client.delete_artifact(args.repository, args.artifact_id)
    print(f"Artifact {args.artifact_id} is deleted")


def register(subparsers: Subparsers) -> None:
    parser = subparsers.add_parser("artifacts", help="Get workflow artifacts")
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List workflow run artifacts")
    add_repository_argument(list_parser)
    list_parser.add_argument("--run-id", type=int, required=True, help="Id of run")
    list_parser.set_defaults(handler=list_artifacts)

    delete_parser = commands.add_parser(
        "delete", help="Delete a workflow run artifact"
    )
    add_repository_argument(delete_parser)
    delete_parser.add_argument(
        "-a",
        "--artifact-id",
        type=int,
        required=True,
        help="Id of artifact to delete",
    )
    delete_parser.set_defaults(handler=delete_artifact)
