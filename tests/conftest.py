"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import httpx
import pytest
import respx

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
API = "https://api.github.com"


@pytest.fixture
def repo_payload():
    """A GitHub repository object as returned by /repos/{owner}/{repo}."""
    return {
        "name": "widgets",
        "full_name": "acme/widgets",
        "owner": {"login": "acme"},
        "private": True,
        "description": "Internal widget service",
        "default_branch": "main",
        "stargazers_count": 4,
        "forks_count": 1,
        "updated_at": "2025-02-27T12:00:00Z",
        "html_url": "https://github.com/acme/widgets",
    }


@pytest.fixture
def commits_payload():
    return [
        {
            "sha": f"sha{i}",
            "commit": {
                "message": f"Commit number {i}",
                "author": {
                    "name": "Alice",
                    "email": "alice@acme.test",
                    "date": "2025-02-26T12:00:00Z",
                },
            },
            "html_url": f"https://github.com/acme/widgets/commit/sha{i}",
        }
        for i in range(7)
    ]


@pytest.fixture
def pulls_payload():
    return [
        {
            "number": 10,
            "title": "Add caching",
            "user": {"login": "alice"},
            "state": "open",
            "created_at": "2025-02-20T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/pull/10",
        },
        {
            "number": 9,
            "title": "Fix login",
            "user": {"login": "bob"},
            "state": "closed",
            "created_at": "2025-02-10T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/pull/9",
        },
        {
            "number": 8,
            "title": "Bump deps",
            "user": None,
            "state": "closed",
            "created_at": "2025-01-10T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/pull/8",
        },
    ]


@pytest.fixture
def issues_payload():
    return [
        {
            "number": 12,
            "title": "Crash on startup",
            "user": {"login": "carol"},
            "state": "open",
            "created_at": "2025-02-25T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/issues/12",
        },
        {
            "number": 11,
            "title": "Docs typo",
            "user": {"login": "dave"},
            "state": "closed",
            "created_at": "2025-02-01T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/issues/11",
        },
        {
            "number": 10,
            "title": "Add caching",
            "user": {"login": "alice"},
            "state": "open",
            "created_at": "2025-02-20T12:00:00Z",
            "html_url": "https://github.com/acme/widgets/pull/10",
            "pull_request": {"url": "https://api.github.com/repos/acme/widgets/pulls/10"},
        },
    ]


@pytest.fixture
def contributors_payload():
    return [
        {"login": "alice", "avatar_url": "https://avatars.test/alice", "contributions": 40},
        {"login": "bob", "avatar_url": "https://avatars.test/bob", "contributions": 12},
    ]


@pytest.fixture
def mock_pulse_routes(
    repo_payload, commits_payload, pulls_payload, issues_payload, contributors_payload
):
    """Register the five pulse endpoints on the active respx router."""

    def _register(owner: str = "acme", repo: str = "widgets") -> dict:
        base = f"{API}/repos/{owner}/{repo}"
        return {
            "repository": respx.get(base).mock(
                return_value=httpx.Response(200, json=repo_payload)
            ),
            "commits": respx.get(f"{base}/commits").mock(
                return_value=httpx.Response(200, json=commits_payload)
            ),
            "pulls": respx.get(f"{base}/pulls").mock(
                return_value=httpx.Response(200, json=pulls_payload)
            ),
            "issues": respx.get(f"{base}/issues").mock(
                return_value=httpx.Response(200, json=issues_payload)
            ),
            "contributors": respx.get(f"{base}/contributors").mock(
                return_value=httpx.Response(200, json=contributors_payload)
            ),
        }

    return _register
