"""View models — relay data shaped for display, independent of any UI toolkit."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from product_pulse.formatting import format_relative_date, truncate_text
from product_pulse.models import PulseReport, Repository

NO_DESCRIPTION = "No description provided"
EMPTY_REPOSITORIES_MESSAGE = (
    "No private repositories found. "
    "Make sure your GitHub token has access to private repositories."
)
REPOSITORIES_ERROR_MESSAGE = (
    "Error loading repositories. Please check your GitHub token configuration."
)
LOADING_PULSE_MESSAGE = "Loading pulse data..."

TITLE_LIMIT = 60
LIST_LIMIT = 5


def pulse_error_message(owner: str, repo: str) -> str:
    return f"Error loading pulse data for {owner}/{repo}"


# ── Repository list ───────────────────────────────────────────────────────

class RepositoryRow(BaseModel):
    """One selectable line of the repository list."""

    owner: str
    name: str
    full_name: str
    description: str
    default_branch: str
    stars: int
    forks: int
    updated: str


def repository_rows(
    repositories: list[Repository], now: Optional[datetime] = None
) -> list[RepositoryRow]:
    return [
        RepositoryRow(
            owner=r.owner,
            name=r.name,
            full_name=r.full_name,
            description=r.description or NO_DESCRIPTION,
            default_branch=r.default_branch,
            stars=r.stargazers_count,
            forks=r.forks_count,
            updated=f"Updated {format_relative_date(r.updated_at, now)}",
        )
        for r in repositories
    ]


# ── Pulse ─────────────────────────────────────────────────────────────────

class StatCard(BaseModel):
    key: str
    label: str
    value: int


class PulseEntry(BaseModel):
    """A list line: truncated primary text plus a byline."""

    text: str
    byline: str
    url: str = ""


class ContributorEntry(BaseModel):
    login: str
    contributions: str
    avatar_url: str = ""


class PulseView(BaseModel):
    title: str
    stat_cards: list[StatCard] = Field(default_factory=list)
    commits: list[PulseEntry] = Field(default_factory=list)
    pull_requests: list[PulseEntry] = Field(default_factory=list)
    issues: list[PulseEntry] = Field(default_factory=list)
    contributors: list[ContributorEntry] = Field(default_factory=list)


def build_pulse_view(report: PulseReport, now: Optional[datetime] = None) -> PulseView:
    """Four stat cards and the top five of each list."""
    stats = report.stats
    cards = [
        StatCard(key="commits", label="Commits (30 days)", value=stats.total_commits),
        StatCard(key="pulls", label="Open Pull Requests", value=stats.open_pull_requests),
        StatCard(key="issues", label="Open Issues", value=stats.open_issues),
        StatCard(key="contributors", label="Contributors", value=stats.total_contributors),
    ]

    commits = [
        PulseEntry(
            text=truncate_text(c.message, TITLE_LIMIT),
            byline=f"by {c.author_name} • {format_relative_date(c.author_date, now)}",
            url=c.html_url,
        )
        for c in report.commits[:LIST_LIMIT]
    ]
    pull_requests = [
        PulseEntry(
            text=truncate_text(pr.title, TITLE_LIMIT),
            byline=f"by {pr.author} • {pr.state} • {format_relative_date(pr.created_at, now)}",
            url=pr.html_url,
        )
        for pr in report.pull_requests[:LIST_LIMIT]
    ]
    issues = [
        PulseEntry(
            text=truncate_text(issue.title, TITLE_LIMIT),
            byline=f"by {issue.author} • {issue.state} • {format_relative_date(issue.created_at, now)}",
            url=issue.html_url,
        )
        for issue in report.genuine_issues[:LIST_LIMIT]
    ]
    contributors = [
        ContributorEntry(
            login=c.login,
            contributions=f"{c.contributions} contributions",
            avatar_url=c.avatar_url,
        )
        for c in report.contributors[:LIST_LIMIT]
    ]

    return PulseView(
        title=report.repository.full_name,
        stat_cards=cards,
        commits=commits,
        pull_requests=pull_requests,
        issues=issues,
        contributors=contributors,
    )
