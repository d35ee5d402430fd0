"""
Error types for stationpref.

Errors only carry a message; nothing here writes to the console or the log.
Whoever observes the error decides whether and how to report it.
"""

from typing import Optional


class StationPrefError(Exception):
    """Base class for all stationpref errors."""
    pass


class ResolverError(StationPrefError):
    """A remote lookup could not produce usable data."""

    def __init__(self, service: str, message: str, url: Optional[str] = None):
        self.service = service
        self.message = message
        self.url = url
        super().__init__(f"{service}: {message}")


class TransportError(ResolverError):
    """Connection failure, timeout or non-2xx HTTP status."""
    pass


class MalformedResponseError(ResolverError):
    """Response body was not JSON or did not have the expected shape."""
    pass


class PipelineError(StationPrefError):
    """Raised when the batch pipeline itself is misused or breaks an invariant."""
    pass


class TableError(StationPrefError):
    """Input table could not be read or output table could not be written."""
    pass
