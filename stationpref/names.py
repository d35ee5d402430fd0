from typing import Sequence

from .models import StationQuery


def parse_station_field(raw: str) -> StationQuery:
    """Split a raw station field into its name and optional line/prefecture hint.

    "渋谷 (銀座線)" -> ("渋谷", "銀座線"), "渋谷" -> ("渋谷", "").
    More than one "(" is treated as no split at all.
    """
    parts = raw.split("(")
    if len(parts) == 2:
        return StationQuery(name=parts[0].strip(), hint=parts[1].replace(")", "").strip())
    return StationQuery(name=raw.strip(), hint="")


def first_field(record: Sequence[str]) -> str:
    """Return the station column of a record, "" for a blank row."""
    return record[0] if record else ""
