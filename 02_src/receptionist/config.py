"""Project-level configuration, path helpers and matching tunables."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "receptionist.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Matching
DEFAULT_MAX_RESULTS = 10
MIN_CONFIDENCE = 0.1
FALLBACK_MIN_SCORE = 0.2

# Transport
DEFAULT_TRANSPORT_TIMEOUT = float(os.getenv("A2A_TRANSPORT_TIMEOUT", "30"))
DEFAULT_PUBLIC_URL = "http://localhost:8000"


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_public_url(env_value: str | None = None) -> str:
    """URL the built-in agents advertise, without a trailing slash."""
    value = env_value or os.getenv("RECEPTIONIST_PUBLIC_URL") or DEFAULT_PUBLIC_URL
    return value.rstrip("/")
