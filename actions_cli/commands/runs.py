"""Workflow run commands."""

import argparse
import logging
import sys

from actions_cli.aggregators import RunStats, filter_workflows
from actions_cli.commands import (
    Subparsers,
    add_env_argument,
    add_repository_argument,
    add_since_argument,
    add_workflow_argument,
)
from actions_cli.dates import date_or_first_of_the_month
from actions_cli.dispatcher import StatsDispatcher, WorkflowStats, workflow_run_stats
from actions_cli.github.client import GitHubActionsClient
from actions_cli.github.models import Workflow
from actions_cli.output import (
    OUTPUT_FORMATS,
    TableWriter,
    format_duration,
    format_optional_duration,
)

log = logging.getLogger(__name__)

STATS_HEADER = ["Workflow", "Runs", "Total Duration", "Min Duration", "Max Duration"]


def stats_row(outcome: WorkflowStats) -> list[object]:
    """Table row for one workflow outcome."""
    if outcome.stats is None:
        return [outcome.workflow.name, f"error: {outcome.error}", "-", "-", "-"]
    stats = outcome.stats
    return [
        outcome.workflow.name,
        stats.count,
        format_duration(stats.total),
        format_optional_duration(stats.min),
        format_optional_duration(stats.max),
    ]


async def show_stats(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Print run statistics per workflow and the total minutes spent."""
    since = date_or_first_of_the_month(args.since)
    log.info("Collecting run statistics for %s since %s", args.repository, since)

    workflows = client.workflows(args.repository)

    async def compute(workflow: Workflow) -> RunStats:
        return await workflow_run_stats(client, args.repository, workflow, since)

    dispatcher = StatsDispatcher(compute=compute)

    writer = TableWriter(stream=sys.stdout, format=args.format)
    writer.writerow(STATS_HEADER)
    summary = await dispatcher.run(
        filter_workflows(args.workflow, workflows),
        lambda outcome: writer.writerow(stats_row(outcome)),
    )
    writer.flush()
    workflows.raise_for_failure()

    print(f"\nTotal minutes spent {int(summary.total.total_seconds()) // 60}")
    if summary.failures:
        log.warning(
            "%d of %d workflow(s) failed and are not counted in the total",
            summary.failures,
            summary.workflows,
        )


async def list_runs(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Print the runs of matching workflows created since the cutoff."""
    since = date_or_first_of_the_month(args.since)
    workflows = client.workflows(args.repository)

    async for workflow in filter_workflows(args.workflow, workflows):
        runs = client.runs(args.repository, workflow.filename, since)
        async for run in runs:
            if run.created_at < since:
                continue
            print(
                run.id,
                run.conclusion or "-",
                format_duration(run.duration),
                run.html_url,
            )
        runs.raise_for_failure()

    workflows.raise_for_failure()


def register(subparsers: Subparsers) -> None:
    parser = subparsers.add_parser("runs", help="Get workflow run information")
    commands = parser.add_subparsers(dest="command", required=True)

    stats_parser = commands.add_parser(
        "stats", help="Extract usage statistics for the current month"
    )
    add_repository_argument(stats_parser)
    add_workflow_argument(stats_parser)
    add_since_argument(stats_parser)
    add_env_argument(
        stats_parser,
        "-f",
        "--format",
        env="ACTIONS_FORMAT",
        required=False,
        default="tab",
        choices=OUTPUT_FORMATS,
        help_text="Format of output 'tab' (default) or 'csv'",
    )
    stats_parser.set_defaults(handler=show_stats)

    list_parser = commands.add_parser("list", help="List runs for a given workflow")
    add_repository_argument(list_parser)
    add_workflow_argument(list_parser, required=True)
    add_since_argument(list_parser)
    list_parser.set_defaults(handler=list_runs)
