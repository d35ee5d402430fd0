import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_STATION_API = "https://express.heartrails.com/api/json"
DEFAULT_POSTAL_API = "https://jp-postal-code-api.ttskch.com/api/v1"
DEFAULT_WORKERS = 10
DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class Settings:
    workers: int = DEFAULT_WORKERS
    timeout: float = DEFAULT_TIMEOUT
    station_api: str = DEFAULT_STATION_API
    postal_api: str = DEFAULT_POSTAL_API
    log_level: str = "INFO"
    log_dir: Path = Path("logs")


def load_env(env_path: Optional[Path] = None) -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment are left untouched.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def _int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from STATIONPREF_* environment variables."""
    env = os.environ if environ is None else environ
    return Settings(
        workers=_int(env, "STATIONPREF_WORKERS", DEFAULT_WORKERS),
        timeout=_float(env, "STATIONPREF_TIMEOUT", DEFAULT_TIMEOUT),
        station_api=env.get("STATIONPREF_STATION_API") or DEFAULT_STATION_API,
        postal_api=(env.get("STATIONPREF_POSTAL_API") or DEFAULT_POSTAL_API).rstrip("/"),
        log_level=(env.get("STATIONPREF_LOG_LEVEL") or "INFO").upper(),
        log_dir=Path(env.get("STATIONPREF_LOG_DIR") or "logs"),
    )
