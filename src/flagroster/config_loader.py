"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

DB_PATH_ENV = "FLAGROSTER_DB_PATH"
API_KEY_ENVS = ("FLAGROSTER_GENAI_API_KEY", "GEMINI_API_KEY", "API_KEY")
MODEL_ENV = "FLAGROSTER_GENAI_MODEL"
TIMEOUT_ENV = "FLAGROSTER_GENAI_TIMEOUT"
ENDPOINT_ENV = "FLAGROSTER_GENAI_ENDPOINT"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    db_path: Path
    genai_api_key: Optional[str] = None
    genai_model: str = DEFAULT_MODEL
    genai_endpoint: Optional[str] = None
    genai_timeout: float = DEFAULT_TIMEOUT


def _env_float(
    env: Mapping[str, str],
    name: str,
    default: float,
    *,
    clamp_min: float | None = None,
) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _default_db_path(env: Mapping[str, str]) -> Path:
    if env.get("PYTEST_CURRENT_TEST"):
        test_dir = Path(tempfile.gettempdir()) / "flagroster-test"
        return test_dir / "flagroster.sqlite"
    return Path.home() / ".flagroster" / "flagroster.sqlite"


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    raw_db = env.get(DB_PATH_ENV)
    db_path = Path(raw_db).expanduser() if raw_db else _default_db_path(env)

    api_key = None
    for name in API_KEY_ENVS:
        value = (env.get(name) or "").strip()
        if value:
            api_key = value
            break

    return Settings(
        db_path=db_path,
        genai_api_key=api_key,
        genai_model=(env.get(MODEL_ENV) or "").strip() or DEFAULT_MODEL,
        genai_endpoint=(env.get(ENDPOINT_ENV) or "").strip() or None,
        genai_timeout=_env_float(env, TIMEOUT_ENV, DEFAULT_TIMEOUT, clamp_min=1.0),
    )
