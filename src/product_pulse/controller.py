"""Dashboard state: repository list, current selection and pulse requests.

The controller holds no widgets. The Textual screen calls it and renders
whatever state it returns, so every outcome (rows, empty, error, loading,
ready, stale) is testable without a terminal.
"""

from datetime import datetime
from typing import Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from product_pulse.client import RelayClient
from product_pulse.exceptions import RelayRequestError
from product_pulse.log import get_logger
from product_pulse.view import (
    EMPTY_REPOSITORIES_MESSAGE,
    LOADING_PULSE_MESSAGE,
    REPOSITORIES_ERROR_MESSAGE,
    PulseView,
    RepositoryRow,
    build_pulse_view,
    pulse_error_message,
    repository_rows,
)

logger = get_logger("controller")


class Selection(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def label(self) -> str:
        return f"{self.owner}/{self.name}"


class PulseRequest(BaseModel):
    """A selection stamped with the token that was current when it was made."""

    model_config = ConfigDict(frozen=True)

    token: int
    selection: Selection


class RepositoryListState(BaseModel):
    kind: Literal["rows", "empty", "error"]
    rows: list[RepositoryRow] = Field(default_factory=list)
    message: str = ""


class PulseState(BaseModel):
    kind: Literal["loading", "ready", "error"]
    selection: Selection
    view: Optional[PulseView] = None
    message: str = ""


class DashboardController:
    """Drives the dashboard against a relay."""

    def __init__(
        self,
        client: RelayClient,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.client = client
        self._clock = clock
        self.rows: list[RepositoryRow] = []
        self.selection: Optional[Selection] = None
        self._latest_token = 0

    def _now(self) -> Optional[datetime]:
        return self._clock() if self._clock else None

    # ── Repository list ───────────────────────────────────────────────────

    async def load_repositories(self) -> RepositoryListState:
        """Fetch the list once; no retry on failure."""
        try:
            repositories = await self.client.fetch_repositories()
        except RelayRequestError as e:
            logger.error("Error loading repositories: %s", e.message)
            self.rows = []
            return RepositoryListState(kind="error", message=REPOSITORIES_ERROR_MESSAGE)

        self.rows = repository_rows(repositories, self._now())
        if not self.rows:
            return RepositoryListState(kind="empty", message=EMPTY_REPOSITORIES_MESSAGE)
        return RepositoryListState(kind="rows", rows=self.rows)

    # ── Selection ─────────────────────────────────────────────────────────

    def select(self, owner: str, name: str) -> PulseRequest:
        """Replace the selection and issue a fresh request token."""
        self._latest_token += 1
        self.selection = Selection(owner=owner, name=name)
        return PulseRequest(token=self._latest_token, selection=self.selection)

    def select_row(self, index: int) -> PulseRequest:
        row = self.rows[index]
        return self.select(row.owner, row.name)

    def is_current(self, request: PulseRequest) -> bool:
        return request.token == self._latest_token

    # ── Pulse ─────────────────────────────────────────────────────────────

    def loading_state(self, request: PulseRequest) -> PulseState:
        return PulseState(
            kind="loading",
            selection=request.selection,
            message=LOADING_PULSE_MESSAGE,
        )

    async def load_pulse(self, request: PulseRequest) -> Optional[PulseState]:
        """Fetch the pulse; None when a newer selection superseded ``request``."""
        sel = request.selection
        try:
            report = await self.client.fetch_pulse(sel.owner, sel.name)
            state = PulseState(
                kind="ready",
                selection=sel,
                view=build_pulse_view(report, self._now()),
            )
        except RelayRequestError as e:
            logger.error("Error loading pulse data for %s: %s", sel.label, e.message)
            state = PulseState(
                kind="error",
                selection=sel,
                message=pulse_error_message(sel.owner, sel.name),
            )

        if not self.is_current(request):
            logger.debug("Discarding stale pulse for %s (token %d)", sel.label, request.token)
            return None
        return state
