"""Dashboard screen — repository list on the left, pulse on the right."""

from rich.markup import escape
from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView, Static

from product_pulse.controller import (
    DashboardController,
    PulseRequest,
    PulseState,
    RepositoryListState,
)
from product_pulse.view import ContributorEntry, PulseEntry, PulseView, RepositoryRow


def render_row(row: RepositoryRow) -> str:
    return (
        f"[b]🔒 {escape(row.full_name)}[/b]\n"
        f"[dim]{escape(row.description)}[/dim]\n"
        f"⎇ {escape(row.default_branch)}  ★ {row.stars}  ⑂ {row.forks}  🕒 {row.updated}"
    )


def render_entry(entry: PulseEntry) -> str:
    return f"{escape(entry.text)}\n[dim]{escape(entry.byline)}[/dim]"


def render_contributor(entry: ContributorEntry) -> str:
    return f"[b]{escape(entry.login)}[/b]  [dim]{entry.contributions}[/dim]"


class DashboardScreen(Screen):
    """Private repository list and the pulse of the selected one."""

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "reload", "Reload"),
    ]

    CSS = """
    #repositories-panel {
        width: 50;
        border: round $primary;
        background: $surface;
    }
    #repositories-list {
        height: 1fr;
    }
    #repositories-list > ListItem {
        padding: 0 1;
        margin-bottom: 1;
    }
    #repositories-list > ListItem.selected {
        background: $primary 30%;
        border-left: thick $accent;
    }
    #repositories-message {
        color: $warning;
        padding: 1;
    }
    #pulse-data {
        border: round $primary;
        padding: 0 1;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .pulse-stats {
        height: 5;
    }
    .stat-card {
        width: 1fr;
        height: 5;
        border: round $accent;
        content-align: center middle;
        text-align: center;
    }
    .pulse-item {
        margin-bottom: 1;
    }
    .loading {
        color: $text-muted;
        margin: 1 0;
    }
    .error-message {
        color: $error;
        margin: 1 0;
    }
    """

    def __init__(self, controller: DashboardController, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            with Vertical(id="repositories-panel"):
                yield Static("PRIVATE REPOSITORIES", classes="section-title")
                yield ListView(id="repositories-list")
                yield Label("", id="repositories-message")
            with VerticalScroll(id="pulse-data"):
                yield Static("Select a repository to see its pulse.", classes="loading")
        yield Footer()

    def on_mount(self) -> None:
        self.load_repositories()

    def action_reload(self) -> None:
        self.load_repositories()

    # ── Repository list ───────────────────────────────────────────────────

    @work(exclusive=True, group="repositories")
    async def load_repositories(self) -> None:
        state = await self.controller.load_repositories()
        await self.show_repositories(state)

    async def show_repositories(self, state: RepositoryListState) -> None:
        list_view = self.query_one("#repositories-list", ListView)
        message = self.query_one("#repositories-message", Label)
        await list_view.clear()
        if state.kind == "error":
            message.update(f"⚠  {state.message}")
            return
        if state.kind == "empty":
            message.update(f"ℹ  {state.message}")
            return
        message.update("")
        await list_view.extend(
            ListItem(Static(render_row(row)), name=str(index))
            for index, row in enumerate(state.rows)
        )

    @on(ListView.Selected, "#repositories-list")
    async def select_repository(self, event: ListView.Selected) -> None:
        for item in self.query("#repositories-list > ListItem"):
            item.remove_class("selected")
        event.item.add_class("selected")

        request = self.controller.select_row(int(event.item.name or 0))
        await self.show_pulse(self.controller.loading_state(request), request)
        self.load_pulse(request)

    # ── Pulse ─────────────────────────────────────────────────────────────

    @work(group="pulse")
    async def load_pulse(self, request: PulseRequest) -> None:
        state = await self.controller.load_pulse(request)
        if state is not None:
            await self.show_pulse(state, request)

    async def show_pulse(self, state: PulseState, request: PulseRequest) -> None:
        container = self.query_one("#pulse-data", VerticalScroll)
        await container.remove_children()
        # A newer selection may have started rendering while children were removed.
        if not self.controller.is_current(request):
            return
        if state.kind == "loading":
            await container.mount(Static(f"⏳ {state.message}", classes="loading"))
        elif state.kind == "error":
            await container.mount(Static(f"⚠  {escape(state.message)}", classes="error-message"))
        elif state.view is not None:
            await container.mount_all(self._pulse_widgets(state.view))

    def _pulse_widgets(self, view: PulseView) -> list:
        widgets: list = [Static(f"📊  {escape(view.title)}", classes="section-title")]
        widgets.append(
            Horizontal(
                *(
                    Static(f"[b]{card.value}[/b]\n{card.label}", classes=f"stat-card {card.key}")
                    for card in view.stat_cards
                ),
                classes="pulse-stats",
            )
        )
        sections = [
            ("RECENT COMMITS", view.commits),
            ("PULL REQUESTS", view.pull_requests),
            ("ISSUES", view.issues),
        ]
        for title, entries in sections:
            widgets.append(Static(title, classes="section-title"))
            widgets.extend(Static(render_entry(e), classes="pulse-item") for e in entries)
        widgets.append(Static("TOP CONTRIBUTORS", classes="section-title"))
        widgets.extend(
            Static(render_contributor(c), classes="pulse-item") for c in view.contributors
        )
        return widgets
