"""Data models for product-pulse.

Python attributes are snake_case; JSON on the relay's HTTP surface is
camelCase (``pullRequests``, ``totalCommits``). Either form is accepted on
input, so the dashboard can validate relay payloads with the same models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Repository ────────────────────────────────────────────────────────────

class Repository(_CamelModel):
    """Snapshot of one repository as listed by GitHub."""

    owner: str
    name: str
    full_name: str = ""
    description: Optional[str] = None
    default_branch: str = "main"
    stargazers_count: int = 0
    forks_count: int = 0
    updated_at: datetime
    private: bool = True
    html_url: str = ""

    def model_post_init(self, _ctx: object) -> None:
        if not self.full_name:
            self.full_name = f"{self.owner}/{self.name}"


# ── Pulse entries ─────────────────────────────────────────────────────────

class CommitSummary(_CamelModel):
    """A commit inside the trailing 30-day window."""

    sha: str
    message: str
    author_name: str
    author_date: datetime
    html_url: str = ""


class PullRequestSummary(_CamelModel):
    """A pull request in any state."""

    number: int
    title: str
    author: str
    state: str
    created_at: datetime
    html_url: str = ""


class IssueSummary(_CamelModel):
    """An issue-endpoint entry; GitHub lists pull requests there too."""

    number: int
    title: str
    author: str
    state: str
    created_at: datetime
    html_url: str = ""
    is_pull_request: bool = False


class ContributorSummary(_CamelModel):
    """A contributor with their contribution count."""

    login: str
    avatar_url: str = ""
    contributions: int = 0


# ── Report ────────────────────────────────────────────────────────────────

class PulseStats(_CamelModel):
    """Counts derived from the four pulse sequences."""

    total_commits: int = 0
    open_pull_requests: int = 0
    closed_pull_requests: int = 0
    open_issues: int = 0
    closed_issues: int = 0
    total_contributors: int = 0


class PulseReport(_CamelModel):
    """Aggregate pulse for one repository, built fresh per request."""

    repository: Repository
    commits: list[CommitSummary] = Field(default_factory=list)
    pull_requests: list[PullRequestSummary] = Field(default_factory=list)
    issues: list[IssueSummary] = Field(default_factory=list)
    contributors: list[ContributorSummary] = Field(default_factory=list)
    stats: PulseStats = Field(default_factory=PulseStats)

    @property
    def genuine_issues(self) -> list[IssueSummary]:
        """Issue entries that are not backed by a pull request."""
        return [i for i in self.issues if not i.is_pull_request]

    def recompute_stats(self) -> PulseStats:
        """Stats derived from the sequences; equals ``stats`` when built normally."""
        from product_pulse.pulse import compute_stats

        return compute_stats(
            self.commits, self.pull_requests, self.issues, self.contributors
        )
