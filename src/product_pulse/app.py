"""Main Textual application for the pulse dashboard."""

from typing import Optional

from textual.app import App

from product_pulse.client import RelayClient
from product_pulse.config import Settings
from product_pulse.controller import DashboardController
from product_pulse.screens.dashboard import DashboardScreen


class PulseDashboardApp(App):
    """Terminal dashboard rendering relay data."""

    TITLE = "Product Pulse Dashboard"
    SUB_TITLE = "Commits · Pull Requests · Issues · Contributors"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, settings: Settings, client: Optional[RelayClient] = None) -> None:
        super().__init__()
        self.settings = settings
        self.client = client or RelayClient(settings.relay_url)
        self.controller = DashboardController(self.client)

    def on_mount(self) -> None:
        self.push_screen(DashboardScreen(self.controller))

    async def on_unmount(self) -> None:
        await self.client.close()
