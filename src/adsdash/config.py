"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer, falling back to the default on bad input."""

    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


class BaseConfig:
    """Configuration shared by the API client, controllers and the shell.

    Built once at process start and passed by reference. Missing backend
    values do not fail here; the API client raises ``ConfigError`` when a
    call actually needs them.
    """

    APP_NAME = "Ads Client Dashboard"
    LOG_FILENAME = "adsdash.log"
    DEFAULT_PAGE_SIZE = 10
    DEFAULT_SAMPLE_SIZE = 3

    def __init__(self) -> None:
        self.BACKEND_URL = (os.getenv("ADSDASH_BACKEND_URL") or "").strip().rstrip("/")
        self.ADMIN_TOKEN = (os.getenv("ADSDASH_ADMIN_TOKEN") or "").strip()
        self.PAGE_SIZE = _env_int("ADSDASH_PAGE_SIZE", self.DEFAULT_PAGE_SIZE)
        self.SAMPLE_SIZE = _env_int("ADSDASH_DASHBOARD_SAMPLE_SIZE", self.DEFAULT_SAMPLE_SIZE)
        self.REQUEST_TIMEOUT = _env_float("ADSDASH_REQUEST_TIMEOUT")
        self.DEV_MODE = _env_bool("ADSDASH_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("ADSDASH_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def has_backend(self) -> bool:
        return bool(self.BACKEND_URL)

    @property
    def has_admin_token(self) -> bool:
        return bool(self.ADMIN_TOKEN)


def load_config(env_file: str | os.PathLike[str] | None = None) -> BaseConfig:
    """Load ``.env`` (or the given file) and build the process configuration."""

    if env_file is not None:
        load_dotenv(env_file, override=True)
    else:
        load_dotenv()
    return BaseConfig()


__all__ = ["BaseConfig", "load_config"]
