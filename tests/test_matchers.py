"""
URL Matcher Tests for the Todoist Pack.

This module tests id extraction from project and task URLs, in both the
app-path and the legacy query-parameter formats.
"""

from __future__ import annotations

import pytest

from todoist_pack.constants import PROJECT_URL_PATTERNS
from todoist_pack.exceptions import TodoistError, TodoistInvalidURLError
from todoist_pack.matchers import extract_id, extract_project_id, extract_task_id


pytestmark = [pytest.mark.matchers, pytest.mark.unit]


# =============================================================================
# Project URLs
# =============================================================================


class TestProjectUrls:
    """Tests for project id extraction."""

    @pytest.mark.parametrize("url, expected", [
        ("https://todoist.com/app/project/2203306141", "2203306141"),
        ("https://todoist.com/showProject?id=2203306141", "2203306141"),
        ("https://todoist.com/showProject?id=42&sync_id=1", "42"),
    ])
    def test_extract_project_id(self, url: str, expected: str):
        """Test both project URL formats."""
        assert extract_project_id(url) == expected

    @pytest.mark.parametrize("url", [
        "",
        "https://todoist.com/app/project/",
        "https://todoist.com/app/project/abc",
        "https://todoist.com/app/project/123/task/456",
        "http://todoist.com/app/project/123",
        "https://example.com/app/project/123",
        "https://todoist.com/showTask?id=123",
    ])
    def test_invalid_project_url(self, url: str):
        """Test that non-matching strings raise the invalid URL error."""
        with pytest.raises(TodoistInvalidURLError) as exc_info:
            extract_project_id(url)

        assert exc_info.value.url == url
        assert str(exc_info.value) == f"Invalid project URL: {url}"

    def test_invalid_url_is_user_visible(self):
        """Test the invalid URL error belongs to the pack's error family."""
        with pytest.raises(TodoistError):
            extract_project_id("not a url")


# =============================================================================
# Task URLs
# =============================================================================


class TestTaskUrls:
    """Tests for task id extraction."""

    @pytest.mark.parametrize("url, expected", [
        ("https://todoist.com/app/project/2203306141/task/2995104339", "2995104339"),
        ("https://todoist.com/showTask?id=2995104339", "2995104339"),
    ])
    def test_extract_task_id(self, url: str, expected: str):
        assert extract_task_id(url) == expected

    def test_project_url_is_not_a_task_url(self):
        with pytest.raises(TodoistInvalidURLError) as exc_info:
            extract_task_id("https://todoist.com/app/project/2203306141")

        assert exc_info.value.kind == "task"


# =============================================================================
# Pattern Order
# =============================================================================


class TestPatternOrder:
    """Tests for the first-match-wins rule."""

    def test_first_matching_pattern_wins(self):
        import re

        patterns = [re.compile(r"id=([0-9]+)"), re.compile(r"([0-9]+)")]

        assert extract_id("x7?id=12", patterns, "thing") == "12"

    def test_falls_through_to_later_pattern(self):
        assert extract_id(
            "https://todoist.com/showProject?id=9",
            PROJECT_URL_PATTERNS,
            "project",
        ) == "9"
