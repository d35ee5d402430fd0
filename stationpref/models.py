"""
Typed records passed between the lookup clients and the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

ERROR_SENTINEL = "ERROR"


@dataclass(frozen=True)
class Job:
    """One input row waiting to be resolved."""

    index: int
    record: Tuple[str, ...]


@dataclass(frozen=True)
class StationQuery:
    name: str
    hint: str = ""


@dataclass(frozen=True)
class StationCandidate:
    """A station returned by the station lookup."""

    name: str
    prefecture: str
    line: str
    postal: str
    x: Optional[float] = None
    y: Optional[float] = None
    prev: Optional[str] = None
    next: Optional[str] = None


@dataclass(frozen=True)
class AddressDetail:
    prefecture: str = ""
    address1: str = ""
    address2: str = ""
    address3: str = ""
    address4: str = ""


@dataclass(frozen=True)
class Address:
    prefecture_code: str = ""
    ja: AddressDetail = field(default_factory=AddressDetail)
    kana: AddressDetail = field(default_factory=AddressDetail)
    en: AddressDetail = field(default_factory=AddressDetail)


@dataclass(frozen=True)
class PostalLookup:
    postal_code: str
    addresses: Tuple[Address, ...] = ()

    def formatted_japanese(self) -> str:
        """Prefecture + address1 + address2 of the first address, or "" if there is none."""
        if not self.addresses:
            return ""
        ja = self.addresses[0].ja
        return f"{ja.prefecture}{ja.address1}{ja.address2}"


class Outcome(str, Enum):
    RESOLVED = "resolved"
    NO_MATCH = "no-match"
    FAILED = "failed"


@dataclass(frozen=True)
class Result:
    """Outcome of resolving one Job. `index` ties it back to the input row."""

    index: int
    outcome: Outcome
    value: str = ""
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.outcome is not Outcome.RESOLVED

    def render(self) -> str:
        # No-match and failures share the sentinel; an empty address stays empty.
        if self.is_error:
            return ERROR_SENTINEL
        return self.value


@dataclass
class BatchResult:
    results: List[Result]

    def values(self) -> List[str]:
        return [r.render() for r in self.results]

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def __len__(self) -> int:
        return len(self.results)
