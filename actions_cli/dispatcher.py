"""Bounded-concurrency fan-out of run statistics across workflows."""

import asyncio
import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from actions_cli.aggregators import RunStats, run_stats
from actions_cli.github.client import GitHubActionsClient
from actions_cli.github.models import Workflow

log = logging.getLogger(__name__)

MAX_CONCURRENT_WORKFLOWS = 20


@dataclass(frozen=True, kw_only=True)
class WorkflowStats:
    """Outcome of one workflow pipeline: either stats or an error message."""

    workflow: Workflow
    stats: RunStats | None = None
    error: str | None = None


@dataclass(frozen=True, kw_only=True)
class StatsSummary:
    """Grand total over all successful workflow pipelines."""

    total: timedelta
    workflows: int
    failures: int


@dataclass(frozen=True, kw_only=True)
class StatsDispatcher:
    """Computes run statistics for many workflows concurrently.

    At most ``limit`` pipelines run at once. Outcomes are sent over a queue to
    a single consumer that owns the grand total and calls the sink, so rows
    are emitted in completion order.
    """

    compute: Callable[[Workflow], Awaitable[RunStats]]
    limit: int = MAX_CONCURRENT_WORKFLOWS

    async def run(
        self,
        workflows: AsyncIterable[Workflow],
        sink: Callable[[WorkflowStats], None],
    ) -> StatsSummary:
        """Run one pipeline per workflow and return the grand total.

        Args:
            workflows: Workflows to compute statistics for, consumed lazily
            sink: Called once per workflow outcome, from a single task

        Returns:
            Summary excluding failed workflows from the total

        """
        outcomes: asyncio.Queue[WorkflowStats | None] = asyncio.Queue()
        slots = asyncio.Semaphore(self.limit)
        consumer = asyncio.create_task(self._drain(outcomes, sink))

        try:
            async with asyncio.TaskGroup() as group:
                async for workflow in workflows:
                    await slots.acquire()
                    log.info("Computing run statistics for %s", workflow.name)
                    group.create_task(self._pipeline(workflow, slots, outcomes))
        finally:
            await outcomes.put(None)
            summary = await consumer

        return summary

    async def _pipeline(
        self,
        workflow: Workflow,
        slots: asyncio.Semaphore,
        outcomes: asyncio.Queue[WorkflowStats | None],
    ) -> None:
        try:
            stats = await self.compute(workflow)
        except Exception as exc:
            log.error(
                "Run statistics failed for workflow %s: %s",
                workflow.name,
                exc,
                exc_info=exc,
            )
            outcome = WorkflowStats(workflow=workflow, error=str(exc))
        else:
            outcome = WorkflowStats(workflow=workflow, stats=stats)
        finally:
            slots.release()

        await outcomes.put(outcome)

    async def _drain(
        self,
        outcomes: asyncio.Queue[WorkflowStats | None],
        sink: Callable[[WorkflowStats], None],
    ) -> StatsSummary:
        total = timedelta(0)
        workflows = failures = 0

        while (outcome := await outcomes.get()) is not None:
            workflows += 1
            if outcome.stats is None:
                failures += 1
            else:
                total += outcome.stats.total
            sink(outcome)

        return StatsSummary(total=total, workflows=workflows, failures=failures)


async def workflow_run_stats(
    client: GitHubActionsClient,
    repository: str,
    workflow: Workflow,
    since: datetime,
) -> RunStats:
    """Fold the runs of one workflow created since ``since``.

    Raises:
        PaginationError: If listing the runs failed part way
        NegativeDurationError: If a run has inverted timestamps

    """
    runs = client.runs(repository, workflow.filename, since)
    stats = await run_stats(since, runs)
    runs.raise_for_failure()
    return stats
