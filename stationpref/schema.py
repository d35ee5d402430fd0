"""
Shape checks and conversion for the two remote JSON payloads.

Both functions raise MalformedResponseError when the payload cannot be
turned into typed records. A payload that is well-formed but empty is not
an error.
"""

from typing import Any, Dict, List, Optional

from .errors import MalformedResponseError
from .models import Address, AddressDetail, PostalLookup, StationCandidate

STATION_SERVICE = "heartrails"
POSTAL_SERVICE = "postal"

REQUIRED_STATION_FIELDS = ["name", "prefecture", "line", "postal"]
ADDRESS_DETAIL_FIELDS = ["prefecture", "address1", "address2", "address3", "address4"]


def _is_str(v: Any) -> bool:
    return isinstance(v, str)


def _optional_float(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def _station(item: Any, position: int) -> StationCandidate:
    if not isinstance(item, dict):
        raise MalformedResponseError(STATION_SERVICE, f"station #{position} is not an object")

    postal = item.get("postal")
    if isinstance(postal, int):
        postal = str(postal)

    for f in REQUIRED_STATION_FIELDS:
        value = postal if f == "postal" else item.get(f)
        if not _is_str(value):
            raise MalformedResponseError(STATION_SERVICE, f"station #{position} field '{f}' must be a string")

    return StationCandidate(
        name=item["name"],
        prefecture=item["prefecture"],
        line=item["line"],
        postal=postal,
        x=_optional_float(item.get("x")),
        y=_optional_float(item.get("y")),
        prev=item.get("prev"),
        next=item.get("next"),
    )


def parse_station_payload(data: Any) -> List[StationCandidate]:
    """
    Convert a HeartRails getStations body into station candidates.

    {"response": {"station": [...]}} yields one candidate per entry.
    {"response": {"error": "..."}} is how the API reports an unknown
    station name and yields an empty list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("response"), dict):
        raise MalformedResponseError(STATION_SERVICE, "missing 'response' object")

    response: Dict[str, Any] = data["response"]
    stations = response.get("station")
    if stations is None:
        return []
    if not isinstance(stations, list):
        raise MalformedResponseError(STATION_SERVICE, "'station' must be a list")

    return [_station(item, i) for i, item in enumerate(stations)]


def _address_detail(data: Any) -> AddressDetail:
    if data is None:
        return AddressDetail()
    if not isinstance(data, dict):
        raise MalformedResponseError(POSTAL_SERVICE, "address detail must be an object")
    values = {}
    for f in ADDRESS_DETAIL_FIELDS:
        v = data.get(f) or ""
        if not _is_str(v):
            raise MalformedResponseError(POSTAL_SERVICE, f"address field '{f}' must be a string")
        values[f] = v
    return AddressDetail(**values)


def parse_postal_payload(data: Any) -> PostalLookup:
    """Convert a jp-postal-code-api body into a PostalLookup."""
    if not isinstance(data, dict):
        raise MalformedResponseError(POSTAL_SERVICE, "body must be an object")

    addresses = data.get("addresses") or []
    if not isinstance(addresses, list):
        raise MalformedResponseError(POSTAL_SERVICE, "'addresses' must be a list")

    parsed = []
    for item in addresses:
        if not isinstance(item, dict):
            raise MalformedResponseError(POSTAL_SERVICE, "address entry must be an object")
        parsed.append(Address(
            prefecture_code=str(item.get("prefectureCode") or ""),
            ja=_address_detail(item.get("ja")),
            kana=_address_detail(item.get("kana")),
            en=_address_detail(item.get("en")),
        ))

    return PostalLookup(postal_code=str(data.get("postalCode") or ""), addresses=tuple(parsed))
