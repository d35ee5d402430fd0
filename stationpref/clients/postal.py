from urllib.parse import quote

import requests

from ..models import PostalLookup
from ..schema import POSTAL_SERVICE, parse_postal_payload
from .common import fetch_json


def postal_url(base_url: str, postal_code: str) -> str:
    return f"{base_url.rstrip('/')}/{quote(postal_code.replace('-', ''))}.json"


def get_address(session: requests.Session, base_url: str, postal_code: str, timeout: float = 15) -> PostalLookup:
    """Fetch the addresses registered for a postal code from jp-postal-code-api."""
    data = fetch_json(session, postal_url(base_url, postal_code), POSTAL_SERVICE, timeout=timeout)
    return parse_postal_payload(data)
