"""Runtime settings for the relay and the dashboard."""

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel

from product_pulse.exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


class Settings(BaseModel):
    """Explicit configuration handed to the relay and the dashboard."""

    github_token: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_base_url: str = DEFAULT_API_BASE_URL
    relay_url: str = ""
    log_level: str = "INFO"

    def model_post_init(self, _ctx: object) -> None:
        if not self.relay_url:
            self.relay_url = f"http://localhost:{self.port}"

    @property
    def has_credential(self) -> bool:
        return bool(self.github_token)


# Names both the stdlib logging module and uvicorn accept, plus stdlib aliases.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    level = _LOG_LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}"
        )
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (call load_dotenv() first)."""
    env = os.environ if environ is None else environ

    port = parse_port(env["PORT"]) if env.get("PORT") else DEFAULT_PORT
    return Settings(
        github_token=env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
        host=env.get("HOST") or DEFAULT_HOST,
        port=port,
        api_base_url=(env.get("GITHUB_API_BASE") or DEFAULT_API_BASE_URL).rstrip("/"),
        relay_url=(env.get("PULSE_RELAY_URL") or "").rstrip("/"),
        log_level=parse_log_level(env.get("LOG_LEVEL") or "INFO"),
    )
