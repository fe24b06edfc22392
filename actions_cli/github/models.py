"""Pydantic models for GitHub Actions API responses."""

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta

from actions_cli.models.base import Model

WORKFLOWS_DIR = ".github/workflows/"


class NegativeDurationError(ValueError):
    """Raised when a run was last updated before it was created."""


class Repository(Model):
    """Repository reference embedded in a code search hit."""

    full_name: str


class CodeSearchItem(Model):
    """A single code search hit."""

    name: str
    path: str
    repository: Repository


class CodeSearchPage(Model):
    """Response from the code search API."""

    incomplete_results: bool = False
    items: Sequence[CodeSearchItem]


class Repo(Model):
    """A repository together with the workflow files found in it."""

    full_name: str
    workflows: Sequence[str]


class Artifact(Model):
    """A workflow run artifact."""

    id: int
    name: str
    size_in_bytes: int
    archive_download_url: str


class ArtifactsPage(Model):
    """Response from list workflow run artifacts API."""

    artifacts: Sequence[Artifact]


class Secret(Model):
    """A repository secret. Values are never returned by the API."""

    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SecretsPage(Model):
    """Response from list repository secrets API."""

    secrets: Sequence[Secret]


class PublicKey(Model):
    """Repository public key used to encrypt secrets."""

    key_id: str
    key: str


class Workflow(Model):
    """A workflow declared in a repository."""

    id: int
    name: str
    state: str
    path: str

    @property
    def filename(self) -> str:
        """Workflow file name relative to the workflows directory."""
        return self.path.replace(WORKFLOWS_DIR, "")


class WorkflowsPage(Model):
    """Response from list repository workflows API."""

    workflows: Sequence[Workflow]


class Run(Model):
    """A workflow run."""

    id: int
    head_branch: str | None = None
    conclusion: str | None = None
    event: str
    status: str
    jobs_url: str
    logs_url: str
    artifacts_url: str
    cancel_url: str
    rerun_url: str
    created_at: datetime
    updated_at: datetime
    html_url: str

    @property
    def duration(self) -> timedelta:
        """Wall-clock time between creation and last update.

        Raises:
            NegativeDurationError: If updated_at precedes created_at

        """
        duration = self.updated_at - self.created_at
        if duration < timedelta(0):
            raise NegativeDurationError(
                f"Run {self.id} was updated at {self.updated_at.isoformat()} "
                f"before it was created at {self.created_at.isoformat()}"
            )
        return duration


class RunsPage(Model):
    """Response from list workflow runs API."""

    workflow_runs: Sequence[Run]


class Billable(Model):
    total_ms: int = 0


class WorkflowTiming(Model):
    """Billable time of a workflow for the current billing cycle."""

    billable: Mapping[str, Billable] = {}

    def _time(self, os_name: str) -> timedelta:
        billable = self.billable.get(os_name)
        return timedelta(milliseconds=billable.total_ms if billable else 0)

    @property
    def ubuntu(self) -> timedelta:
        return self._time("UBUNTU")

    @property
    def macos(self) -> timedelta:
        return self._time("MACOS")

    @property
    def windows(self) -> timedelta:
        return self._time("WINDOWS")
