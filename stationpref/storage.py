import csv
from pathlib import Path
from typing import Iterable, List

from .errors import TableError


def read_records(path: Path) -> List[List[str]]:
    """Read the input table and return its data rows (header row dropped).

    A leading UTF-8 BOM is tolerated. Raises TableError if the file is
    missing, unreadable, or has no header row.
    """
    if not path.exists():
        raise TableError(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise TableError(f"Could not read {path}: {e}") from e
    if not rows:
        raise TableError(f"Input file has no header row: {path}")
    return rows[1:]


def write_values(path: Path, values: Iterable[str]) -> None:
    """Write one single-column row per value, UTF-8 with BOM and CRLF line endings.

    An empty value is written as a quoted empty cell (""), not a blank line.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f, lineterminator="\r\n")
            for value in values:
                writer.writerow([value])
    except OSError as e:
        raise TableError(f"Could not write {path}: {e}") from e
