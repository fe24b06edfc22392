"""Integration tests for cursor-following pagination."""

from datetime import datetime, timedelta, timezone

import pytest
from aioresponses import aioresponses as aioresponses_cls

from actions_cli.aggregators import RunStats, run_stats
from actions_cli.github.client import GitHubActionsClient
from actions_cli.github.models import Workflow, WorkflowsPage
from actions_cli.github.pagination import End, PageStream, PaginationError, Request
from actions_cli.testing.payloads import (
    workflow,
    workflow_run,
    workflow_runs_response,
    workflows_response,
)

from ..conftest import REPO_URL, request_count

WORKFLOWS_URL = f"{REPO_URL}/actions/workflows"
RUNS_URL = f"{REPO_URL}/actions/workflows/ci.yml/runs"
SINCE = datetime(2020, 3, 12, tzinfo=timezone.utc)


def link(url: str, rel: str = "next") -> dict[str, str]:
    """Link header pointing at ``url``."""
    return {"Link": f'<{url}>; rel="{rel}", <{url}&page=9>; rel="last"'}


def workflows_stream(
    client: GitHubActionsClient,
) -> PageStream[WorkflowsPage, Workflow]:
    return client.workflows("octo-org/octo-repo")


class TestPageStream:
    """Tests for PageStream iteration."""

    async def test_follows_next_links_in_order(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Yields items page by page, left to right."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100",
            payload=workflows_response(
                [workflow(workflow_id=1, name="a"), workflow(workflow_id=2, name="b")]
            ),
            headers=link(f"{WORKFLOWS_URL}?per_page=100&page=2"),
        )
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100&page=2",
            payload=workflows_response([workflow(workflow_id=3, name="c")]),
        )

        stream = workflows_stream(client)
        names = [item.name async for item in stream]

        assert names == ["a", "b", "c"]
        assert stream.end == End("exhausted")
        assert stream.pages == 2
        assert request_count(aioresponses) == 2

    async def test_single_page_without_link(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Stops after one page when there is no next link."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100",
            payload=workflows_response([workflow()]),
            headers={"Link": f'<{WORKFLOWS_URL}?per_page=100&page=1>; rel="first"'},
        )

        stream = workflows_stream(client)
        items = [item async for item in stream]

        assert len(items) == 1
        assert stream.end == End("exhausted")

    async def test_restarts_on_each_iteration(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Each async for fetches from the first page again."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100",
            payload=workflows_response([workflow()]),
            repeat=True,
        )

        stream = workflows_stream(client)
        first = [item async for item in stream]
        second = [item async for item in stream]

        assert first == second
        assert request_count(aioresponses) == 2

    async def test_http_error_ends_stream_as_failed(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Keeps items already yielded and records the failure."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100",
            payload=workflows_response([workflow(name="a")]),
            headers=link(f"{WORKFLOWS_URL}?per_page=100&page=2"),
        )
        aioresponses.get(f"{WORKFLOWS_URL}?per_page=100&page=2", status=502)

        stream = workflows_stream(client)
        names = [item.name async for item in stream]

        assert names == ["a"]
        assert stream.failed
        assert stream.end is not None
        assert stream.end.reason == "failed"
        with pytest.raises(PaginationError, match="Failed to list"):
            stream.raise_for_failure()

    async def test_decode_error_ends_stream_as_failed(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Treats a page of the wrong shape as a failed request."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100", payload={"message": "Not Found"}
        )

        stream = workflows_stream(client)
        items = [item async for item in stream]

        assert items == []
        assert stream.failed

    async def test_non_json_body_ends_stream_as_failed(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Treats an undecodable body as a failed request."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100", body="<html>", content_type="text/html"
        )

        stream = workflows_stream(client)

        assert [item async for item in stream] == []
        assert stream.failed

    async def test_exhausted_stream_does_not_raise(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """raise_for_failure is a no-op after a complete listing."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=100", payload=workflows_response()
        )

        stream = workflows_stream(client)
        assert [item async for item in stream] == []

        stream.raise_for_failure()
        assert not stream.failed

    async def test_sends_extra_request_headers(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Passes per-request headers and query params to the transport."""
        aioresponses.get(
            f"{WORKFLOWS_URL}?per_page=5", payload=workflows_response([workflow()])
        )
        stream = PageStream(
            session=client.session,
            request=Request(
                url=WORKFLOWS_URL,
                params={"per_page": "5"},
                headers={"X-GitHub-Api-Version": "2022-11-28"},
            ),
            page_model=WorkflowsPage,
            extract=lambda page: page.workflows,
        )

        assert len([item async for item in stream]) == 1
        (calls,) = aioresponses.requests.values()
        assert calls[0].kwargs["headers"]["X-GitHub-Api-Version"] == "2022-11-28"


class TestRunPagination:
    """Tests for time-windowed run listings."""

    async def test_two_page_listing_with_cutoff(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Fetches both pages and counts only runs since the cutoff."""
        aioresponses.get(
            f"{RUNS_URL}?per_page=100&status=completed",
            payload=workflow_runs_response(
                [
                    workflow_run(
                        run_id=3,
                        created_at="2020-03-14T10:00:00Z",
                        updated_at="2020-03-14T10:05:00Z",
                    ),
                    workflow_run(
                        run_id=2,
                        created_at="2020-03-12T00:00:00Z",
                        updated_at="2020-03-12T00:01:00Z",
                    ),
                    workflow_run(
                        run_id=1,
                        created_at="2020-03-11T23:00:00Z",
                        updated_at="2020-03-11T23:30:00Z",
                    ),
                ]
            ),
            headers=link(f"{RUNS_URL}?per_page=100&status=completed&page=2"),
        )
        aioresponses.get(
            f"{RUNS_URL}?per_page=100&status=completed&page=2",
            payload=workflow_runs_response(
                [
                    workflow_run(
                        run_id=0,
                        created_at="2020-03-01T08:00:00Z",
                        updated_at="2020-03-01T09:00:00Z",
                    )
                ]
            ),
        )

        runs = client.runs("octo-org/octo-repo", "ci.yml", SINCE)
        stats = await run_stats(SINCE, runs)

        assert stats == RunStats(
            count=2,
            total=timedelta(minutes=6),
            min=timedelta(minutes=1),
            max=timedelta(minutes=5),
        )
        assert request_count(aioresponses) == 2
        assert runs.end == End("exhausted")

    async def test_stops_when_page_predates_cutoff(
        self, client: GitHubActionsClient, aioresponses: aioresponses_cls
    ) -> None:
        """Does not fetch the next page once a whole page is too old."""
        aioresponses.get(
            f"{RUNS_URL}?per_page=100&status=completed",
            payload=workflow_runs_response(
                [
                    workflow_run(
                        created_at="2020-03-11T10:00:00Z",
                        updated_at="2020-03-11T10:05:00Z",
                    )
                ]
            ),
            headers=link(f"{RUNS_URL}?per_page=100&status=completed&page=2"),
        )

        runs = client.runs("octo-org/octo-repo", "ci.yml", SINCE)
        stats = await run_stats(SINCE, runs)

        assert stats == RunStats()
        assert request_count(aioresponses) == 1
        assert runs.end == End("stopped")
