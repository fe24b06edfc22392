"""Workflow commands."""

import argparse
import sys
from datetime import timedelta

from actions_cli.aggregators import filter_workflows
from actions_cli.commands import (
    Subparsers,
    add_repository_argument,
    add_workflow_argument,
)
from actions_cli.github.client import GitHubActionsClient
from actions_cli.output import TableWriter, format_duration


async def list_workflows(
    client: GitHubActionsClient, args: argparse.Namespace
) -> None:
    """Print declared workflows and their paths."""
    writer = TableWriter(stream=sys.stdout)
    writer.writerow(["Workflow", "Path"])
    workflows = client.workflows(args.repository)
    async for workflow in filter_workflows(args.workflow, workflows):
        writer.writerow([workflow.name, workflow.path])
    writer.flush()
    workflows.raise_for_failure()


async def workflow_usage(
    client: GitHubActionsClient, args: argparse.Namespace
) -> None:
    """Print billable time per operating system for each workflow."""
    writer = TableWriter(stream=sys.stdout)
    writer.writerow(["Workflow", "Linux", "MacOs", "Windows"])
    total = timedelta(0)
    workflows = client.workflows(args.repository)
    async for workflow in filter_workflows(args.workflow, workflows):
        timing = await client.workflow_timing(args.repository, workflow.id)
        total += timing.ubuntu + timing.macos + timing.windows
        writer.writerow(
            [
                workflow.name,
                format_duration(timing.ubuntu),
                format_duration(timing.macos),
                format_duration(timing.windows),
            ]
        )
    writer.flush()
    workflows.raise_for_failure()

    print(f"\nTotal minutes spent {int(total.total_seconds()) // 60}")


def register(subparsers: Subparsers) -> None:
    parser = subparsers.add_parser("workflows", help="Get workflow information")
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List declared workflows")
    add_repository_argument(list_parser)
    add_workflow_argument(list_parser)
    list_parser.set_defaults(handler=list_workflows)

    usage_parser = commands.add_parser(
        "usage", help="List billable minutes of declared workflows"
    )
    add_repository_argument(usage_parser)
    add_workflow_argument(usage_parser)
    usage_parser.set_defaults(handler=workflow_usage)
