"""Tests for the dashboard's relay client."""

import httpx
import pytest
import respx

from product_pulse.client import RelayClient
from product_pulse.exceptions import RelayRequestError

RELAY = "http://relay.test"


@pytest.fixture
def relay_client():
    return RelayClient(RELAY + "/")


def _repository_json(name="widgets"):
    return {
        "owner": "acme",
        "name": name,
        "fullName": f"acme/{name}",
        "description": None,
        "defaultBranch": "main",
        "stargazersCount": 2,
        "forksCount": 0,
        "updatedAt": "2025-02-27T12:00:00Z",
        "private": True,
        "htmlUrl": "",
    }


class TestRelayClient:
    def test_trailing_slash_stripped(self, relay_client):
        assert relay_client.base_url == RELAY

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_repositories(self, relay_client):
        respx.get(f"{RELAY}/api/repositories").mock(
            return_value=httpx.Response(200, json=[_repository_json(), _repository_json("gadgets")])
        )
        repos = await relay_client.fetch_repositories()
        await relay_client.close()

        assert [r.full_name for r in repos] == ["acme/widgets", "acme/gadgets"]
        assert repos[0].description is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_pulse(self, relay_client):
        payload = {
            "repository": _repository_json(),
            "commits": [
                {
                    "sha": "a1",
                    "message": "Initial",
                    "authorName": "Alice",
                    "authorDate": "2025-02-26T12:00:00Z",
                }
            ],
            "pullRequests": [],
            "issues": [],
            "contributors": [],
            "stats": {
                "totalCommits": 1,
                "openPullRequests": 0,
                "closedPullRequests": 0,
                "openIssues": 0,
                "closedIssues": 0,
                "totalContributors": 0,
            },
        }
        route = respx.get(f"{RELAY}/api/repository/acme/widgets/pulse").mock(
            return_value=httpx.Response(200, json=payload)
        )
        report = await relay_client.fetch_pulse("acme", "widgets")
        await relay_client.close()

        assert route.called
        assert report.stats.total_commits == 1
        assert report.commits[0].author_name == "Alice"

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises_with_relay_message(self, relay_client):
        respx.get(f"{RELAY}/api/repositories").mock(
            return_value=httpx.Response(400, json={"error": "GitHub token not configured"})
        )
        with pytest.raises(RelayRequestError) as exc_info:
            await relay_client.fetch_repositories()
        await relay_client.close()

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "GitHub token not configured"

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_error_body(self, relay_client):
        respx.get(f"{RELAY}/api/repository/acme/widgets/pulse").mock(
            return_value=httpx.Response(502, text="Bad Gateway")
        )
        with pytest.raises(RelayRequestError) as exc_info:
            await relay_client.fetch_pulse("acme", "widgets")
        await relay_client.close()

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error(self, relay_client):
        respx.get(f"{RELAY}/api/repositories").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(RelayRequestError, match="Could not reach relay"):
            await relay_client.fetch_repositories()
        await relay_client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_payload(self, relay_client):
        respx.get(f"{RELAY}/api/repositories").mock(
            return_value=httpx.Response(200, json=[{"name": "no-owner"}])
        )
        with pytest.raises(RelayRequestError, match="Malformed"):
            await relay_client.fetch_repositories()
        await relay_client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_pulse_with_inconsistent_stats(self, relay_client):
        payload = {
            "repository": _repository_json(),
            "commits": [],
            "pullRequests": [],
            "issues": [],
            "contributors": [],
            "stats": {
                "totalCommits": 5,
                "openPullRequests": 0,
                "closedPullRequests": 0,
                "openIssues": 0,
                "closedIssues": 0,
                "totalContributors": 0,
            },
        }
        respx.get(f"{RELAY}/api/repository/acme/widgets/pulse").mock(
            return_value=httpx.Response(200, json=payload)
        )
        with pytest.raises(RelayRequestError, match="Inconsistent pulse stats for acme/widgets"):
            await relay_client.fetch_pulse("acme", "widgets")
        await relay_client.close()
