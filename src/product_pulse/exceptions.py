"""Product Pulse exception classes."""


class PulseError(Exception):
    """Base exception for all Product Pulse errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ConfigurationError(PulseError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class CredentialNotConfiguredError(ConfigurationError):
    """Raised before any GitHub call when no token is configured."""

    def __init__(self) -> None:
        super().__init__("GitHub token not configured")


class UpstreamError(PulseError):
    """A GitHub failure collapsed to a generic, caller-safe message."""

    pass


class RepositoriesFetchError(UpstreamError):
    """Raised when the private repository listing fails."""

    def __init__(self) -> None:
        super().__init__("REPOSITORIES_FETCH_FAILED", "Failed to fetch repositories")


class PulseFetchError(UpstreamError):
    """Raised when any of the pulse calls fails."""

    def __init__(self, owner: str, repo: str) -> None:
        self.owner = owner
        self.repo = repo
        super().__init__("PULSE_FETCH_FAILED", "Failed to fetch repository pulse data")


class RelayRequestError(PulseError):
    """Raised by the dashboard client on transport errors or non-2xx replies."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__("RELAY_REQUEST_FAILED", message)
