"""Error types shared by the pipeline, the interaction log and the API."""

from __future__ import annotations

MANUAL_PASTE_HINT = (
    "Automated access is blocked on this site. "
    "Please copy and paste the job description text directly."
)


class PortfolioApiError(Exception):
    """Base class. ``error`` is the short title returned to HTTP callers."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str = "", *, error: str | None = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class InputValidationError(PortfolioApiError):
    """A required request field is missing or malformed."""

    status_code = 400
    error = "Invalid request"


class ScrapeError(PortfolioApiError):
    """A job-description URL could not be turned into usable text."""

    status_code = 400
    error = "Failed to scrape job description from URL"

    def __init__(self, message: str = MANUAL_PASTE_HINT, *, error: str | None = None):
        super().__init__(message, error=error)


class ProviderError(PortfolioApiError):
    """The LLM provider call failed."""

    status_code = 500
    error = "LLM provider error"


class ConfigError(PortfolioApiError):
    """Required server configuration is absent."""

    status_code = 500
    error = "Server configuration error"


class Unauthorized(PortfolioApiError):
    status_code = 401
    error = "Unauthorized"


class StoreError(PortfolioApiError):
    """A durable-store operation failed. Never surfaced to HTTP callers."""
