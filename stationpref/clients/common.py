"""Shared request handling for the lookup services."""

from typing import Any, Dict, Optional

import requests

from ..errors import MalformedResponseError, TransportError
from ..logger import get_logger


def fetch_json(
    session: requests.Session,
    url: str,
    service: str,
    params: Optional[Dict[str, str]] = None,
    timeout: float = 15,
) -> Any:
    """Fetch URL and decode its JSON body with standardized error handling.

    Args:
        session: Shared session (connection pool) used by every worker
        url: The URL to fetch
        service: The service name for logging and errors (e.g., 'heartrails')
        params: Optional query parameters
        timeout: Request timeout in seconds

    Returns:
        Decoded JSON body

    Raises:
        TransportError: On HTTP error status, timeout, or request failure
        MalformedResponseError: When the body is not valid JSON
    """
    logger = get_logger()
    logger.record_api_call(service)
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.debug(f"{service} request failed", url=url, status=status)
        raise TransportError(service, f"request failed ({status})", url) from e
    except requests.exceptions.Timeout as e:
        logger.debug(f"{service} request timed out", url=url)
        raise TransportError(service, "request timed out", url) from e
    except requests.exceptions.RequestException as e:
        logger.debug(f"{service} request error", url=url, error=str(e))
        raise TransportError(service, f"request error: {e}", url) from e

    try:
        return resp.json()
    except ValueError as e:
        raise MalformedResponseError(service, "response body is not valid JSON", url) from e
