"""
Tests for the To Do client - Graph enumeration and due-task filtering.

All Graph calls go to FakeGraph through httpx.MockTransport.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from fakes import FakeGraph, GRAPH_PREFIX, make_task, no_sleep
from todo_ics.environments.base import AuthError, UpstreamError
from todo_ics.environments.microsoft.auth.token_provider import TokenProvider
from todo_ics.environments.microsoft.todo.client import TodoClient


def make_client(graph: FakeGraph, **kwargs) -> TodoClient:
    kwargs.setdefault("token_provider", TokenProvider(access_token="graph-token"))
    kwargs.setdefault("sleep", no_sleep)
    kwargs.setdefault("list_delay", 0.1)
    return TodoClient(transport=graph.transport, outlook_timezone="UTC", **kwargs)


# ===========================================================================
# FILTERING
# ===========================================================================

class TestFetchDueTasks:
    """Tests for fetch_due_tasks()."""

    @pytest.mark.asyncio
    async def test_keeps_only_due_unfinished_tasks(self):
        graph = FakeGraph(lists=[
            ("l1", [
                make_task("due"),
                make_task("done", status="completed"),
                make_task("done-caps", status="COMPLETED"),
                make_task("no-due", due=None),
                make_task("empty-due", due=""),
                make_task("in-progress", status="inProgress"),
            ]),
        ])

        tasks = await make_client(graph).fetch_due_tasks()

        assert [t.id for t in tasks] == ["due", "in-progress"]

    @pytest.mark.asyncio
    async def test_preserves_list_then_task_order(self):
        graph = FakeGraph(lists=[
            ("l1", [make_task("a1"), make_task("a2")]),
            ("l2", []),
            ("l3", [make_task("c1"), make_task("c2", status="completed"), make_task("c3")]),
        ])

        tasks = await make_client(graph).fetch_due_tasks()

        assert [t.id for t in tasks] == ["a1", "a2", "c1", "c3"]

    @pytest.mark.asyncio
    async def test_no_lists_returns_empty(self):
        graph = FakeGraph(lists=[])

        assert await make_client(graph).fetch_due_tasks() == []
        assert graph.paths() == [GRAPH_PREFIX]


# ===========================================================================
# REQUESTS
# ===========================================================================

class TestGraphRequests:
    """Tests for the requests sent to Graph."""

    @pytest.mark.asyncio
    async def test_requests_are_authorized_and_selected(self):
        graph = FakeGraph(lists=[("l1", [make_task("t1")])])
        client = TodoClient(
            token_provider=TokenProvider(access_token="graph-token"),
            outlook_timezone="Pacific Standard Time",
            page_size=100,
            transport=graph.transport,
            sleep=no_sleep,
        )

        await client.fetch_due_tasks()

        lists_request, tasks_request = graph.requests
        for request in graph.requests:
            assert request.headers["Authorization"] == "Bearer graph-token"
            assert request.headers["Prefer"] == 'outlook.timezone="Pacific Standard Time"'

        assert lists_request.url.params["$select"] == "id,displayName"
        assert tasks_request.url.path == f"{GRAPH_PREFIX}/l1/tasks"
        assert tasks_request.url.params["$top"] == "100"
        assert "dueDateTime" in tasks_request.url.params["$select"]

    @pytest.mark.asyncio
    async def test_token_obtained_once_per_fetch(self):
        graph = FakeGraph(lists=[("l1", []), ("l2", [])])
        provider = AsyncMock(spec=TokenProvider)
        provider.get.return_value = "graph-token"

        await make_client(graph, token_provider=provider).fetch_due_tasks()

        provider.get.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delay_between_list_requests(self):
        graph = FakeGraph(lists=[("l1", []), ("l2", []), ("l3", [])])
        sleep = AsyncMock()

        await make_client(graph, sleep=sleep, list_delay=0.1).fetch_due_tasks()

        # Three lists -> two gaps
        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.1)

    @pytest.mark.asyncio
    async def test_follows_next_link(self):
        next_link = f"https://graph.microsoft.com{GRAPH_PREFIX}/l1/tasks?$skip=1"

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == GRAPH_PREFIX:
                return httpx.Response(200, json={"value": [{"id": "l1", "displayName": "Tasks"}]})
            if "$skip" in request.url.params:
                return httpx.Response(200, json={"value": [make_task("second")]})
            return httpx.Response(200, json={
                "value": [make_task("first")],
                "@odata.nextLink": next_link,
            })

        client = TodoClient(
            token_provider=TokenProvider(access_token="graph-token"),
            transport=httpx.MockTransport(handler),
            sleep=no_sleep,
        )

        tasks = await client.fetch_due_tasks()

        assert [t.id for t in tasks] == ["first", "second"]


# ===========================================================================
# ERRORS
# ===========================================================================

class TestUpstreamErrors:
    """Any failed request aborts the whole fetch."""

    @pytest.mark.asyncio
    async def test_lists_failure_raises(self):
        graph = FakeGraph(fail={GRAPH_PREFIX: 503})

        with pytest.raises(UpstreamError) as exc_info:
            await make_client(graph).fetch_due_tasks()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_single_list_failure_returns_nothing(self):
        graph = FakeGraph(
            lists=[("l1", [make_task("a1")]), ("l2", [make_task("b1")]), ("l3", [make_task("c1")])],
            fail={f"{GRAPH_PREFIX}/l2/tasks": 429},
        )

        with pytest.raises(UpstreamError) as exc_info:
            await make_client(graph).fetch_due_tasks()

        assert exc_info.value.status_code == 429
        # Stops at the failing list
        assert f"{GRAPH_PREFIX}/l3/tasks" not in graph.paths()

    @pytest.mark.asyncio
    async def test_network_error_raises_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = TodoClient(
            token_provider=TokenProvider(access_token="graph-token"),
            transport=httpx.MockTransport(handler),
            sleep=no_sleep,
        )

        with pytest.raises(UpstreamError):
            await client.fetch_due_tasks()

    @pytest.mark.asyncio
    async def test_auth_error_stops_before_any_request(self):
        graph = FakeGraph(lists=[("l1", [])])

        with pytest.raises(AuthError):
            await make_client(graph, token_provider=TokenProvider()).fetch_due_tasks()

        assert graph.requests == []
