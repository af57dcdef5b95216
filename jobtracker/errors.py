"""
Error types raised by the tracker.

Every error the workflow knows how to report derives from TrackerError,
so the menu loop can log it and carry on.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker errors."""
    pass


class ConfigError(TrackerError):
    """Missing or malformed configuration value."""
    pass


class FetchError(TrackerError):
    """A listing page could not be retrieved."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class FetchNetworkError(FetchError):
    """The request was sent but no response came back."""
    pass


class FetchSetupError(FetchError):
    """The request could not be built (bad URL, unsupported scheme)."""
    pass


class FetchHTTPError(FetchError):
    """The server answered with a status outside 2xx."""

    def __init__(self, message: str, url: str = "", status_code: int = 0, body: str = ""):
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


class ExtractionError(TrackerError):
    """The extraction service call failed."""
    pass


class StoreError(TrackerError):
    """A persistence statement failed."""
    pass


class StoreClosedError(StoreError):
    """Operation attempted after the store was closed."""

    def __init__(self, message: str = "store closed"):
        super().__init__(message)


class NotFoundError(TrackerError):
    """An update or delete referenced a job id that does not exist."""

    def __init__(self, job_id: int, message: Optional[str] = None):
        super().__init__(message or f"No job with id {job_id}")
        self.job_id = job_id
