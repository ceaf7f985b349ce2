"""GitHub data fetching via REST API."""

from datetime import datetime
from typing import Any, Optional

import httpx

from product_pulse.config import DEFAULT_API_BASE_URL
from product_pulse.log import get_logger
from product_pulse.models import (
    CommitSummary,
    ContributorSummary,
    IssueSummary,
    PullRequestSummary,
    Repository,
)

logger = get_logger("fetcher")

USER_AGENT = "product-pulse"


def _login(user: Optional[dict]) -> str:
    # Deleted accounts come back as null users.
    return (user or {}).get("login") or "ghost"


class GitHubFetcher:
    """Fetches repositories, commits, PRs, issues and contributors from GitHub.

    Every listing is a single page; callers pass the page size they want.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET one resource; raises httpx.HTTPStatusError on non-2xx."""
        client = await self._client_instance()
        logger.debug("GET %s params=%s", path, params)
        resp = await client.get(path, params=params)
        resp.raise_for_status()
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def _get_list(self, path: str, params: dict[str, str]) -> list[dict]:
        data = await self._get_json(path, params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array from {path}, got {type(data).__name__}")
        return data

    # ── Repositories ──────────────────────────────────────────────────────

    @staticmethod
    def _to_repository(item: dict) -> Repository:
        return Repository(
            owner=item["owner"]["login"],
            name=item["name"],
            full_name=item.get("full_name", ""),
            description=item.get("description"),
            default_branch=item.get("default_branch") or "main",
            stargazers_count=item.get("stargazers_count", 0),
            forks_count=item.get("forks_count", 0),
            updated_at=item["updated_at"],
            private=item.get("private", True),
            html_url=item.get("html_url", ""),
        )

    async def list_private_repositories(self, limit: int = 10) -> list[Repository]:
        """The authenticated user's private repos, most recently updated first."""
        raw = await self._get_list(
            "/user/repos",
            params={
                "visibility": "private",
                "sort": "updated",
                "per_page": str(limit),
            },
        )
        return [self._to_repository(item) for item in raw]

    async def fetch_repository(self, owner: str, repo: str) -> Repository:
        """Fetch repository metadata."""
        item = await self._get_json(f"/repos/{owner}/{repo}")
        return self._to_repository(item)

    # ── Commits ───────────────────────────────────────────────────────────

    async def fetch_commits(
        self, owner: str, repo: str, since: datetime, limit: int = 100
    ) -> list[CommitSummary]:
        """Fetch commits authored since the given timestamp."""
        raw = await self._get_list(
            f"/repos/{owner}/{repo}/commits",
            params={"since": since.isoformat(), "per_page": str(limit)},
        )
        commits: list[CommitSummary] = []
        for item in raw:
            detail = item.get("commit", {})
            author = detail.get("author") or detail.get("committer") or {}
            commits.append(
                CommitSummary(
                    sha=item["sha"],
                    message=detail.get("message", ""),
                    author_name=author.get("name", "Unknown"),
                    author_date=author["date"],
                    html_url=item.get("html_url", ""),
                )
            )
        return commits

    # ── Pull Requests ─────────────────────────────────────────────────────

    async def fetch_pull_requests(
        self, owner: str, repo: str, state: str = "all", limit: int = 20
    ) -> list[PullRequestSummary]:
        """Fetch pull requests in the given state."""
        raw = await self._get_list(
            f"/repos/{owner}/{repo}/pulls",
            params={"state": state, "per_page": str(limit)},
        )
        return [
            PullRequestSummary(
                number=item["number"],
                title=item["title"],
                author=_login(item.get("user")),
                state=item["state"],
                created_at=item["created_at"],
                html_url=item.get("html_url", ""),
            )
            for item in raw
        ]

    # ── Issues ────────────────────────────────────────────────────────────

    async def fetch_issues(
        self, owner: str, repo: str, state: str = "all", limit: int = 20
    ) -> list[IssueSummary]:
        """Fetch issue entries, flagging the ones backed by a pull request."""
        raw = await self._get_list(
            f"/repos/{owner}/{repo}/issues",
            params={"state": state, "per_page": str(limit)},
        )
        return [
            IssueSummary(
                number=item["number"],
                title=item["title"],
                author=_login(item.get("user")),
                state=item["state"],
                created_at=item["created_at"],
                html_url=item.get("html_url", ""),
                is_pull_request=bool(item.get("pull_request")),
            )
            for item in raw
        ]

    # ── Contributors ──────────────────────────────────────────────────────

    async def fetch_contributors(
        self, owner: str, repo: str, limit: int = 10
    ) -> list[ContributorSummary]:
        """Fetch top contributors; an empty repository yields 204 and no entries."""
        raw = await self._get_list(
            f"/repos/{owner}/{repo}/contributors",
            params={"per_page": str(limit)},
        )
        return [
            ContributorSummary(
                login=item.get("login") or item.get("name") or "anonymous",
                avatar_url=item.get("avatar_url", ""),
                contributions=item.get("contributions", 0),
            )
            for item in raw
        ]
