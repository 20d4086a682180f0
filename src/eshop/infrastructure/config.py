"""Runtime settings, read from ``ESHOP_*`` environment variables."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from eshop.domain.service.reservation_engine import DEFAULT_MAX_ATTEMPTS
from eshop.infrastructure.http.product_catalog_client import DEFAULT_TIMEOUT

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    catalog_url: str | None = None
    http_timeout: float = DEFAULT_TIMEOUT
    reserve_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get("ESHOP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            catalog_url=env.get("ESHOP_CATALOG_URL") or None,
            http_timeout=_parse(env, "ESHOP_HTTP_TIMEOUT", float, DEFAULT_TIMEOUT),
            reserve_max_attempts=_parse(
                env, "ESHOP_RESERVE_MAX_ATTEMPTS", int, DEFAULT_MAX_ATTEMPTS
            ),
            log_level=env.get("ESHOP_LOG_LEVEL", "WARNING").upper(),
        )


def _parse(env: Mapping[str, str], name: str, kind: type, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {kind.__name__}, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
