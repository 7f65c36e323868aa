"""Exceptions raised by crew tool adapters.

Propagation differs per adapter family:
- Google proxy adapters return ``{"success": False, "error": ...}`` for
  transport failures and only raise ConfigurationError.
- Google direct (OAuth2 SDK) and WordPress adapters raise.
"""

from typing import List, Optional, Sequence


class ToolError(Exception):
    """Base class for all adapter errors."""


class ConfigurationError(ToolError):
    """Required credentials are missing after every source was tried."""

    def __init__(self, missing: Sequence[str], sources: Sequence[str], details: Optional[Sequence[str]] = None):
        self.missing: List[str] = list(missing)
        self.sources: List[str] = list(sources)
        listed = ", ".join(details or self.missing)
        super().__init__(
            f"Missing required credentials: {listed}. "
            f"Looked in: {', '.join(self.sources)}"
        )


class TransportError(ToolError):
    """Non-2xx HTTP response or network failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class VendorAPIError(ToolError):
    """A vendor SDK call was rejected (bad token, insufficient scope, ...)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
