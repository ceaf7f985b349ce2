"""Pulse aggregation — deterministic stats from the fetched sequences."""

from product_pulse.models import (
    CommitSummary,
    ContributorSummary,
    IssueSummary,
    PulseReport,
    PulseStats,
    PullRequestSummary,
    Repository,
)


def _count_state(items: list, state: str) -> int:
    return sum(1 for item in items if item.state == state)


def compute_stats(
    commits: list[CommitSummary],
    pull_requests: list[PullRequestSummary],
    issues: list[IssueSummary],
    contributors: list[ContributorSummary],
) -> PulseStats:
    """Derive pulse counts; PR-backed issue entries are excluded from issue counts."""
    genuine = [i for i in issues if not i.is_pull_request]
    return PulseStats(
        total_commits=len(commits),
        open_pull_requests=_count_state(pull_requests, "open"),
        closed_pull_requests=_count_state(pull_requests, "closed"),
        open_issues=_count_state(genuine, "open"),
        closed_issues=_count_state(genuine, "closed"),
        total_contributors=len(contributors),
    )


def build_pulse_report(
    repository: Repository,
    commits: list[CommitSummary],
    pull_requests: list[PullRequestSummary],
    issues: list[IssueSummary],
    contributors: list[ContributorSummary],
) -> PulseReport:
    """Combine the five fetch results into one report."""
    return PulseReport(
        repository=repository,
        commits=commits,
        pull_requests=pull_requests,
        issues=issues,
        contributors=contributors,
        stats=compute_stats(commits, pull_requests, issues, contributors),
    )
