"""Folds over paginated listings."""

from collections.abc import AsyncIterable, AsyncIterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from actions_cli.github.models import CodeSearchItem, Repo, Run, Workflow


@dataclass(frozen=True, kw_only=True)
class RunStats:
    """Aggregate durations of the runs of one workflow.

    ``min`` and ``max`` are absent exactly when ``count`` is zero.
    """

    count: int = 0
    total: timedelta = timedelta(0)
    min: timedelta | None = None
    max: timedelta | None = None

    def add(self, duration: timedelta) -> "RunStats":
        """Return stats including one more run of ``duration``."""
        return RunStats(
            count=self.count + 1,
            total=self.total + duration,
            min=duration if self.min is None else min(self.min, duration),
            max=duration if self.max is None else max(self.max, duration),
        )


async def run_stats(since: datetime, runs: AsyncIterable[Run]) -> RunStats:
    """Fold runs created at or after ``since`` into a RunStats.

    Raises:
        NegativeDurationError: If a counted run has inverted timestamps

    """
    stats = RunStats()
    async for run in runs:
        # a single page can straddle the cutoff
        if run.created_at < since:
            continue
        stats = stats.add(run.duration)
    return stats


async def group_repos(items: AsyncIterable[CodeSearchItem]) -> Sequence[Repo]:
    """Group code search hits into one Repo per repository, sorted by name."""
    workflows: dict[str, list[str]] = {}
    async for item in items:
        workflows.setdefault(item.repository.full_name, []).append(item.path)

    return [
        Repo(full_name=full_name, workflows=paths)
        for full_name, paths in sorted(workflows.items())
    ]


async def filter_workflows(
    name: str | None, workflows: AsyncIterable[Workflow]
) -> AsyncIterator[Workflow]:
    """Yield workflows whose name contains ``name``, ignoring case.

    ``None`` matches every workflow.
    """
    needle = name.lower() if name is not None else None
    async for workflow in workflows:
        if needle is None or needle in workflow.name.lower():
            yield workflow
