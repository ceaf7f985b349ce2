"""Relay operations — authenticated GitHub calls aggregated per request.

The relay never exposes upstream detail: failures are logged here in full and
re-raised as generic :class:`~product_pulse.exceptions.UpstreamError`
subclasses.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx

from product_pulse.config import Settings
from product_pulse.exceptions import (
    CredentialNotConfiguredError,
    PulseFetchError,
    RepositoriesFetchError,
)
from product_pulse.fetcher import GitHubFetcher
from product_pulse.log import get_logger
from product_pulse.models import PulseReport, Repository
from product_pulse.pulse import build_pulse_report

logger = get_logger("relay")

REPOSITORY_LIMIT = 10
COMMIT_WINDOW = timedelta(days=30)
COMMIT_LIMIT = 100
PULL_REQUEST_LIMIT = 20
ISSUE_LIMIT = 20
CONTRIBUTOR_LIMIT = 10

# Malformed GitHub payloads surface as KeyError/TypeError/ValueError
# (pydantic.ValidationError is a ValueError).
UPSTREAM_ERRORS = (httpx.HTTPError, KeyError, TypeError, ValueError)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Relay:
    """Lists private repositories and builds pulse reports."""

    def __init__(
        self,
        settings: Settings,
        fetcher: Optional[GitHubFetcher] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.settings = settings
        self._fetcher = fetcher or GitHubFetcher(
            token=settings.github_token,
            base_url=settings.api_base_url,
        )
        self._clock = clock or _utcnow

    async def close(self) -> None:
        await self._fetcher.close()

    # ── Operations ────────────────────────────────────────────────────────

    async def list_repositories(self) -> list[Repository]:
        """Up to 10 private repositories, most recently updated first."""
        if not self.settings.has_credential:
            raise CredentialNotConfiguredError()
        try:
            return await self._fetcher.list_private_repositories(limit=REPOSITORY_LIMIT)
        except UPSTREAM_ERRORS as e:
            logger.error("GitHub API error while listing repositories: %s", e, exc_info=e)
            raise RepositoriesFetchError() from e

    async def get_pulse(self, owner: str, repo: str) -> PulseReport:
        """Fetch the five pulse sources concurrently; any failure aborts all."""
        since = self._clock() - COMMIT_WINDOW
        f = self._fetcher
        try:
            async with asyncio.TaskGroup() as tg:
                repository = tg.create_task(f.fetch_repository(owner, repo))
                commits = tg.create_task(
                    f.fetch_commits(owner, repo, since, limit=COMMIT_LIMIT)
                )
                pulls = tg.create_task(
                    f.fetch_pull_requests(owner, repo, state="all", limit=PULL_REQUEST_LIMIT)
                )
                issues = tg.create_task(
                    f.fetch_issues(owner, repo, state="all", limit=ISSUE_LIMIT)
                )
                contributors = tg.create_task(
                    f.fetch_contributors(owner, repo, limit=CONTRIBUTOR_LIMIT)
                )
        except ExceptionGroup as group:
            logger.error(
                "Error fetching pulse data for %s/%s: %s",
                owner,
                repo,
                "; ".join(repr(e) for e in group.exceptions),
                exc_info=group,
            )
            raise PulseFetchError(owner, repo) from group

        report = build_pulse_report(
            repository.result(),
            commits.result(),
            pulls.result(),
            issues.result(),
            contributors.result(),
        )
        logger.info(
            "Built pulse for %s/%s: %d commits, %d PRs, %d issue entries, %d contributors",
            owner,
            repo,
            report.stats.total_commits,
            len(report.pull_requests),
            len(report.issues),
            report.stats.total_contributors,
        )
        return report
