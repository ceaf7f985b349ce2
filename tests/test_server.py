"""Tests for the relay HTTP surface."""

import httpx
import pytest
import respx

from product_pulse.config import Settings
from product_pulse.relay import Relay
from product_pulse.server import create_app

from conftest import API, FIXED_NOW


async def _get(app, path):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://relay.test") as client:
        resp = await client.get(path)
    await app.state.relay.close()
    return resp


def _app(token="test-token"):
    settings = Settings(github_token=token)
    return create_app(settings, relay=Relay(settings, clock=lambda: FIXED_NOW))


class TestRepositoriesRoute:
    @pytest.mark.asyncio
    @respx.mock
    async def test_lists_repositories_as_camel_case(self, repo_payload):
        respx.get(f"{API}/user/repos").mock(
            return_value=httpx.Response(200, json=[repo_payload])
        )
        resp = await _get(_app(), "/api/repositories")

        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 1
        assert body[0]["fullName"] == "acme/widgets"
        assert body[0]["stargazersCount"] == 4

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_list(self):
        respx.get(f"{API}/user/repos").mock(return_value=httpx.Response(200, json=[]))
        resp = await _get(_app(), "/api/repositories")

        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_credential_is_400_without_network(self):
        route = respx.get(f"{API}/user/repos")
        resp = await _get(_app(token=None), "/api/repositories")

        assert resp.status_code == 400
        assert resp.json() == {"error": "GitHub token not configured"}
        assert not route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_upstream_failure_is_500(self):
        respx.get(f"{API}/user/repos").mock(
            return_value=httpx.Response(403, text="API rate limit exceeded")
        )
        resp = await _get(_app(), "/api/repositories")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch repositories"}


class TestPulseRoute:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_pulse_report(self, mock_pulse_routes):
        mock_pulse_routes()
        resp = await _get(_app(), "/api/repository/acme/widgets/pulse")

        assert resp.status_code == 200
        body = resp.json()
        assert body["repository"]["fullName"] == "acme/widgets"
        assert len(body["pullRequests"]) == 3
        assert body["stats"] == {
            "totalCommits": 7,
            "openPullRequests": 1,
            "closedPullRequests": 2,
            "openIssues": 1,
            "closedIssues": 1,
            "totalContributors": 2,
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_any_upstream_failure_is_500(self, mock_pulse_routes):
        routes = mock_pulse_routes()
        routes["issues"].mock(side_effect=httpx.ConnectTimeout("slow"))
        resp = await _get(_app(), "/api/repository/acme/widgets/pulse")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch repository pulse data"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_repository_is_500(self, mock_pulse_routes):
        routes = mock_pulse_routes(owner="acme", repo="nope")
        routes["repository"].mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )
        resp = await _get(_app(), "/api/repository/acme/nope/pulse")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch repository pulse data"}
