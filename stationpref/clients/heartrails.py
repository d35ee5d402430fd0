from typing import List

import requests

from ..models import StationCandidate
from ..schema import STATION_SERVICE, parse_station_payload
from .common import fetch_json


def get_stations(session: requests.Session, base_url: str, name: str, timeout: float = 15) -> List[StationCandidate]:
    """Look up every station called `name` through the HeartRails Express API.

    An unknown name is not an error: the API answers with an "error" field
    instead of a station list and this returns [].
    """
    data = fetch_json(
        session,
        base_url,
        STATION_SERVICE,
        params={"method": "getStations", "name": name},
        timeout=timeout,
    )
    return parse_station_payload(data)
