"""
Client for the two remote lookups behind a station resolution.

One instance is shared by every worker; calls are stateless and the
underlying requests.Session is only used as a connection pool.
"""

from typing import List, Optional

import requests

from ..env import DEFAULT_POSTAL_API, DEFAULT_STATION_API, DEFAULT_TIMEOUT
from ..models import StationCandidate
from . import heartrails, postal


class ResolverClient:
    def __init__(
        self,
        station_api: str = DEFAULT_STATION_API,
        postal_api: str = DEFAULT_POSTAL_API,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.station_api = station_api
        self.postal_api = postal_api
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "ResolverClient":
        return cls(
            station_api=settings.station_api,
            postal_api=settings.postal_api,
            timeout=settings.timeout,
            session=session,
        )

    def lookup_station(self, name: str) -> List[StationCandidate]:
        """Return every station candidate for `name` (possibly none)."""
        return heartrails.get_stations(self.session, self.station_api, name, timeout=self.timeout)

    def lookup_address(self, postal_code: str) -> str:
        """Return the formatted Japanese address for a postal code, "" if the service has none."""
        lookup = postal.get_address(self.session, self.postal_api, postal_code, timeout=self.timeout)
        return lookup.formatted_japanese()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
