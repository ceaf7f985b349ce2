"""Dashboard-side client for the relay HTTP surface."""

from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from product_pulse.exceptions import RelayRequestError
from product_pulse.log import get_logger
from product_pulse.models import PulseReport, Repository

logger = get_logger("client")

_repository_list = TypeAdapter(list[Repository])


class RelayClient:
    """Talks to a running relay; every failure becomes RelayRequestError."""

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str) -> object:
        client = await self._client_instance()
        try:
            resp = await client.get(path)
        except httpx.HTTPError as e:
            logger.error("Relay request %s failed: %s", path, e)
            raise RelayRequestError(f"Could not reach relay: {e}") from e
        if not resp.is_success:
            try:
                detail = resp.json().get("error", resp.reason_phrase)
            except (ValueError, AttributeError):
                detail = resp.reason_phrase
            logger.error("Relay request %s returned %d: %s", path, resp.status_code, detail)
            raise RelayRequestError(detail, status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise RelayRequestError(f"Relay returned invalid JSON for {path}") from e

    async def fetch_repositories(self) -> list[Repository]:
        data = await self._get("/api/repositories")
        try:
            return _repository_list.validate_python(data)
        except ValidationError as e:
            raise RelayRequestError(f"Malformed repository list: {e}") from e

    async def fetch_pulse(self, owner: str, repo: str) -> PulseReport:
        data = await self._get(f"/api/repository/{owner}/{repo}/pulse")
        try:
            report = PulseReport.model_validate(data)
        except ValidationError as e:
            raise RelayRequestError(f"Malformed pulse payload: {e}") from e
        if report.stats != report.recompute_stats():
            logger.error("Pulse for %s/%s carries stats that disagree with its lists", owner, repo)
            raise RelayRequestError(f"Inconsistent pulse stats for {owner}/{repo}")
        return report
