"""Service configuration loaded from environment variables.

The configuration is assembled once at startup by ``load_service_config``
and handed to ``create_app``; nothing else reads the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LOCAL_DEV_ORIGIN = "http://localhost:3000"


@dataclass
class ServiceConfig:
    """Runtime settings for the stats service."""

    frontend_url: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8080
    probe_timeout: float = 10.0
    clone_timeout: float = 300.0
    max_workers: int = 4
    log_level: str = "INFO"
    extra_origins: list[str] = field(default_factory=list)

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins: the configured frontend first, then local dev."""
        origins = [self.frontend_url] if self.frontend_url else []
        origins.append(LOCAL_DEV_ORIGIN)
        origins.extend(o for o in self.extra_origins if o not in origins)
        return origins


def _parse_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_service_config(env: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Build a ServiceConfig from environment variables.

    Variables:
        URL: Frontend origin allowed by CORS (optional).
        CORS_EXTRA_ORIGINS: Comma-separated additional origins.
        HOST, PORT: Bind address.
        PROBE_TIMEOUT_SECONDS, CLONE_TIMEOUT_SECONDS: Fetch timeouts.
        STATS_MAX_WORKERS: Threads running pipelines.
        LOG_LEVEL: Root log level when launched via ``main.run``.

    Raises:
        ValueError: If a numeric variable is malformed or not positive.
    """
    if env is None:
        env = os.environ

    frontend_url = env.get("URL", "").strip() or None
    if frontend_url is None:
        logger.warning("env var URL not found; only %s is allowed by CORS", LOCAL_DEV_ORIGIN)

    extra = [o.strip() for o in env.get("CORS_EXTRA_ORIGINS", "").split(",") if o.strip()]

    return ServiceConfig(
        frontend_url=frontend_url,
        host=env.get("HOST", "").strip() or "0.0.0.0",
        port=_parse_number(env, "PORT", 8080, int),
        probe_timeout=_parse_number(env, "PROBE_TIMEOUT_SECONDS", 10.0, float),
        clone_timeout=_parse_number(env, "CLONE_TIMEOUT_SECONDS", 300.0, float),
        max_workers=_parse_number(env, "STATS_MAX_WORKERS", 4, int),
        log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
        extra_origins=extra,
    )
