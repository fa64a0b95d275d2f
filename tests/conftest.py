"""
Pytest Configuration and Fixtures for Todoist Pack Tests.

This module provides fixtures, payload factories, and a recording mock
fetcher for testing the pack's formulas and sync tables.

Architecture:
    - MockFetcher: Routed fake of the host fetcher that records every request
    - Factories: Generate Todoist API payloads (projects, tasks, labels, events)
    - Fixtures: Provide configured fetchers, contexts and the pack
    - Markers: Custom pytest markers for test categorization
"""

from __future__ import annotations

from typing import Any, Callable, Union

import pytest

from todoist_pack.exceptions import error_for_status
from todoist_pack.pack import build_pack
from todoist_pack.sdk import ExecutionContext, FetchRequest, FetchResponse, Pack


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "matchers: URL matcher tests")
    config.addinivalue_line("markers", "mappers: Response mapper tests")
    config.addinivalue_line("markers", "formulas: Formula tests")
    config.addinivalue_line("markers", "sync: Sync table tests")
    config.addinivalue_line("markers", "errors: Error handling tests")


# =============================================================================
# ID Generators
# =============================================================================


class IDGenerator:
    """Sequential numeric ID generator for test payloads."""

    _counter: int = 2200000000

    @classmethod
    def reset(cls) -> None:
        cls._counter = 2200000000

    @classmethod
    def next_id(cls) -> int:
        cls._counter += 1
        return cls._counter


# =============================================================================
# Payload Factories
# =============================================================================


class ProjectFactory:
    """Factory for REST project payloads."""

    @staticmethod
    def create(
        id: int | None = None,
        name: str = "Test Project",
        parent_id: int | None = None,
        shared: bool = False,
        favorite: bool = False,
        **kwargs,
    ) -> dict[str, Any]:
        project_id = id or IDGenerator.next_id()
        return {
            "id": project_id,
            "name": name,
            "color": 47,
            "parent_id": parent_id,
            "order": 1,
            "comment_count": 0,
            "shared": shared,
            "favorite": favorite,
            "sync_id": 0,
            "url": f"https://todoist.com/showProject?id={project_id}",
            **kwargs,
        }

    @staticmethod
    def create_batch(count: int, **kwargs) -> list[dict[str, Any]]:
        return [ProjectFactory.create(name=f"Project {i+1}", **kwargs) for i in range(count)]


class TaskFactory:
    """Factory for task payloads from the REST and sync endpoints."""

    @staticmethod
    def create(
        id: int | None = None,
        content: str = "Test Task",
        project_id: int = 2203306141,
        parent_id: int | None = None,
        labels: list[Any] | None = None,
        **kwargs,
    ) -> dict[str, Any]:
        """A REST ``rest/v1/tasks`` payload."""
        task_id = id or IDGenerator.next_id()
        return {
            "id": task_id,
            "content": content,
            "description": "",
            "project_id": project_id,
            "section_id": 0,
            "parent_id": parent_id,
            "order": 1,
            "priority": 1,
            "label_ids": labels if labels is not None else [],
            "completed": False,
            "comment_count": 0,
            "created": "2022-01-10T10:00:00Z",
            "url": f"https://todoist.com/showTask?id={task_id}",
            **kwargs,
        }

    @staticmethod
    def create_item(
        id: int | None = None,
        content: str = "Test Item",
        project_id: int = 2203306141,
        labels: list[Any] | None = None,
        sync_id: int | None = None,
        **kwargs,
    ) -> dict[str, Any]:
        """An open item from the sync ``items`` resource."""
        return {
            "id": id or IDGenerator.next_id(),
            "sync_id": sync_id,
            "content": content,
            "description": "",
            "project_id": project_id,
            "parent_id": None,
            "child_order": 1,
            "priority": 1,
            "labels": labels if labels is not None else [],
            "checked": 0,
            "responsible_uid": None,
            "date_added": "2022-01-10T10:00:00Z",
            "due": None,
            **kwargs,
        }

    @staticmethod
    def create_completed(
        task_id: int | None = None,
        content: str = "Done Item",
        project_id: int = 2203306141,
        **kwargs,
    ) -> dict[str, Any]:
        """A record from ``completed/get_all``."""
        return {
            "id": IDGenerator.next_id(),
            "task_id": task_id or IDGenerator.next_id(),
            "content": content,
            "project_id": project_id,
            "user_id": 1855589,
            "completed_date": "2022-01-11T09:30:00Z",
            "meta_data": None,
            **kwargs,
        }


class LabelFactory:
    """Factory for sync ``labels`` resource payloads."""

    @staticmethod
    def create(
        id: int | None = None,
        name: str = "Label",
        color: int = 30,
        item_order: int = 0,
        is_favorite: bool = False,
        **kwargs,
    ) -> dict[str, Any]:
        return {
            "id": id or IDGenerator.next_id(),
            "name": name,
            "color": color,
            "item_order": item_order,
            "is_deleted": 0,
            "is_favorite": is_favorite,
            **kwargs,
        }


class ActivityEventFactory:
    """Factory for activity log events."""

    @staticmethod
    def create(
        id: int | None = None,
        object_type: str = "item",
        object_id: int | None = None,
        event_type: str = "added",
        extra_data: dict[str, Any] | None = None,
        **kwargs,
    ) -> dict[str, Any]:
        return {
            "id": id or IDGenerator.next_id(),
            "object_type": object_type,
            "object_id": object_id or IDGenerator.next_id(),
            "event_type": event_type,
            "event_date": "2022-01-10T10:00:00Z",
            "parent_project_id": 2203306141,
            "parent_item_id": None,
            "initiator_id": None,
            "extra_data": extra_data if extra_data is not None else {"content": "Buy milk", "client": "web"},
            **kwargs,
        }

    @staticmethod
    def create_batch(count: int, **kwargs) -> list[dict[str, Any]]:
        return [ActivityEventFactory.create(**kwargs) for _ in range(count)]


# =============================================================================
# Mock Fetcher
# =============================================================================


Responder = Callable[[FetchRequest], Any]


class MockFetcher:
    """
    Routed fake of the host fetcher.

    Responses are registered per (method, url). A route may hold a single
    body, a list of bodies returned one per call, a callable receiving the
    request, or an exception to raise. Every request is recorded.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[Union[Any, Responder, Exception]]] = {}
        self.requests: list[FetchRequest] = []

    def add(self, method: str, url: str, *bodies: Any) -> None:
        """Queue one or more responses for a route; the last one repeats."""
        self.routes.setdefault((method.upper(), url), []).extend(bodies)

    def fail(self, method: str, url: str, status_code: int, body: Any = None) -> None:
        self.add(method, url, error_for_status(status_code, url, body))

    async def fetch(self, request: FetchRequest) -> FetchResponse:
        self.requests.append(request)
        key = (request.method.upper(), request.url)
        if key not in self.routes:
            raise AssertionError(f"Unexpected request: {key}")

        queue = self.routes[key]
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(entry, Exception):
            raise entry
        if callable(entry):
            entry = entry(request)
        return FetchResponse(status_code=200, body=entry)

    def get_requests(self, method: str, url: str) -> list[FetchRequest]:
        return [r for r in self.requests if r.method.upper() == method.upper() and r.url == url]

    def assert_called(self, method: str, url: str, times: int | None = None) -> None:
        calls = self.get_requests(method, url)
        if times is not None:
            assert len(calls) == times, f"Expected {method} {url} {times} times, got {len(calls)}"
        else:
            assert len(calls) > 0, f"Expected {method} {url} to be requested at least once"

    def assert_no_requests(self) -> None:
        assert self.requests == [], f"Expected no requests, got {len(self.requests)}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def id_generator():
    """Reset and provide ID generator."""
    IDGenerator.reset()
    return IDGenerator


@pytest.fixture
def fetcher() -> MockFetcher:
    """Create a fresh mock fetcher."""
    return MockFetcher()


@pytest.fixture
def context(fetcher: MockFetcher) -> ExecutionContext:
    return ExecutionContext(fetcher=fetcher)


@pytest.fixture
def pack() -> Pack:
    """A freshly built Todoist pack."""
    return build_pack()


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def project_factory() -> type[ProjectFactory]:
    return ProjectFactory


@pytest.fixture
def task_factory() -> type[TaskFactory]:
    return TaskFactory


@pytest.fixture
def label_factory() -> type[LabelFactory]:
    return LabelFactory


@pytest.fixture
def event_factory() -> type[ActivityEventFactory]:
    return ActivityEventFactory
