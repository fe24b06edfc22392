"""GitHub Actions REST API client."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote

import aiohttp

from actions_cli.config import ActionsConfig
from actions_cli.github.models import (
    Artifact,
    ArtifactsPage,
    CodeSearchItem,
    CodeSearchPage,
    PublicKey,
    Run,
    RunsPage,
    Secret,
    SecretsPage,
    Workflow,
    WorkflowsPage,
    WorkflowTiming,
)
from actions_cli.github.pagination import PageStream, Request
from actions_cli.github.policies import possibly_recent

log = logging.getLogger(__name__)

PER_PAGE = "100"


class GitHubApiError(RuntimeError):
    """Raised when a one-shot API call returns an unexpected status."""

    def __init__(self, action: str, status: int, text: str) -> None:
        super().__init__(f"Failed to {action}: {status} {text}")
        self.status = status


@dataclass(frozen=True, kw_only=True)
class GitHubActionsClient:
    """Client for the GitHub Actions API sharing one authenticated session."""

    config: ActionsConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ActionsConfig
    ) -> AsyncGenerator["GitHubActionsClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
        }
        async with aiohttp.ClientSession(headers=headers) as session:
            yield cls(config=config, session=session)

    def url(self, path: str) -> str:
        """Absolute API URL for ``path``."""
        return f"{self.config.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def search_workflow_files(
        self, org: str
    ) -> PageStream[CodeSearchPage, CodeSearchItem]:
        """Search an organization's code for workflow definition files."""
        request = Request(
            url=self.url("search/code"),
            params={"per_page": PER_PAGE, "q": f"org:{org} path:.github/workflows"},
        )
        return PageStream(
            session=self.session,
            request=request,
            page_model=CodeSearchPage,
            extract=lambda page: page.items,
        )

    def workflows(self, repository: str) -> PageStream[WorkflowsPage, Workflow]:
        """List the workflows in a repository."""
        request = Request(
            url=self.url(f"repos/{repository}/actions/workflows"),
            params={"per_page": PER_PAGE},
        )
        return PageStream(
            session=self.session,
            request=request,
            page_model=WorkflowsPage,
            extract=lambda page: page.workflows,
        )

    def runs(
        self, repository: str, workflow: str, since: datetime
    ) -> PageStream[RunsPage, Run]:
        """List completed runs of a workflow file, newest first.

        Stops fetching once a whole page predates ``since``. Pages may still
        contain older runs, callers filter individual runs themselves.
        """
        request = Request(
            url=self.url(
                f"repos/{repository}/actions/workflows/{quote(workflow, safe='')}/runs"
            ),
            params={"per_page": PER_PAGE, "status": "completed"},
        )
        return PageStream(
            session=self.session,
            request=request,
            page_model=RunsPage,
            extract=lambda page: page.workflow_runs,
            should_continue=possibly_recent(since),
        )

    def artifacts(
        self, repository: str, run_id: int
    ) -> PageStream[ArtifactsPage, Artifact]:
        """List the artifacts of a workflow run."""
        request = Request(
            url=self.url(f"repos/{repository}/actions/runs/{run_id}/artifacts"),
            params={"per_page": PER_PAGE},
        )
        return PageStream(
            session=self.session,
            request=request,
            page_model=ArtifactsPage,
            extract=lambda page: page.artifacts,
        )

    def secrets(self, repository: str) -> PageStream[SecretsPage, Secret]:
        """List repository secrets without their values."""
        request = Request(
            url=self.url(f"repos/{repository}/actions/secrets"),
            params={"per_page": PER_PAGE},
        )
        return PageStream(
            session=self.session,
            request=request,
            page_model=SecretsPage,
            extract=lambda page: page.secrets,
        )

    async def delete_artifact(self, repository: str, artifact_id: int) -> None:
        """Delete a workflow run artifact."""
        url = self.url(f"repos/{repository}/actions/artifacts/{artifact_id}")
        log.info("Deleting artifact %d from %s", artifact_id, repository)

        async with self.session.delete(url) as response:
            if response.status != 204:
                text = await response.text()
                raise GitHubApiError("delete artifact", response.status, text)

    async def public_key(self, repository: str) -> PublicKey:
        """Get the public key used to encrypt repository secrets."""
        url = self.url(f"repos/{repository}/actions/secrets/public-key")

        async with self.session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise GitHubApiError("get public key", response.status, text)
            data = await response.json()

        return PublicKey.model_validate(data)

    async def upsert_secret(
        self, repository: str, name: str, encrypted_value: str, key_id: str
    ) -> None:
        """Create or update a secret with a value sealed for the repository key."""
        url = self.url(f"repos/{repository}/actions/secrets/{quote(name, safe='')}")
        payload = {"encrypted_value": encrypted_value, "key_id": key_id}
        log.info("Storing secret %s in %s", name, repository)

        async with self.session.put(url, json=payload) as response:
            if response.status not in (201, 204):
                text = await response.text()
                raise GitHubApiError("store secret", response.status, text)

    async def delete_secret(self, repository: str, name: str) -> None:
        """Delete a repository secret."""
        url = self.url(f"repos/{repository}/actions/secrets/{quote(name, safe='')}")
        log.info("Deleting secret %s from %s", name, repository)

        async with self.session.delete(url) as response:
            if response.status != 204:
                text = await response.text()
                raise GitHubApiError("delete secret", response.status, text)

    async def workflow_timing(
        self, repository: str, workflow_id: int
    ) -> WorkflowTiming:
        """Get billable time of a workflow for the current billing cycle."""
        url = self.url(f"repos/{repository}/actions/workflows/{workflow_id}/timing")

        async with self.session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise GitHubApiError("get workflow timing", response.status, text)
            data = await response.json()

        return WorkflowTiming.model_validate(data)
