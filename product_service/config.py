"""product_service configuration.

``ENV`` (default ``dev``) picks ``config/.env.<ENV>``; the directory can
be moved with ``CONFIG_DIR``. Values in the process environment win over
the file, so a single key can be overridden without editing it.

A missing file is a startup error. A missing ``USER_SERVICE_URL`` is
not: every bookings lookup then fails with UpstreamUnavailable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from common.errors import ConfigError

DEFAULT_ENV = "dev"
DEFAULT_CONFIG_DIR = "config"


@dataclass(frozen=True)
class Settings:
    user_service_url: str = ""
    request_timeout: float = 5.0
    port: int = 8082


def config_path(environ: Mapping[str, str]) -> Path:
    env = environ.get("ENV") or DEFAULT_ENV
    config_dir = environ.get("CONFIG_DIR") or DEFAULT_CONFIG_DIR
    return Path(config_dir) / f".env.{env}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    path = config_path(environ)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")

    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    for key in ("USER_SERVICE_URL", "REQUEST_TIMEOUT", "PORT"):
        if environ.get(key):
            values[key] = environ[key]

    try:
        return Settings(
            user_service_url=values.get("USER_SERVICE_URL", ""),
            request_timeout=float(values.get("REQUEST_TIMEOUT", "5")),
            port=int(values.get("PORT", "8082")),
        )
    except ValueError as e:
        raise ConfigError(f"invalid value in {path}: {e}") from e
