# Process-level setup: structlog rendering, Sentry client and the default wrapper.
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import sentry_sdk
import structlog

from .config import LogwrapSettings
from .wrapper import Wrapper, set_default

_log = logging.getLogger(__name__)

_global_cfg: Dict[str, Any] = {}


def init(
    service_name: str = "",
    environment: str = "dev",
    sentry_dsn: Optional[str] = None,
    sentry_traces_sample_rate: float = 0.0,
    json_logs: bool = True,
    default_wrapper: Optional[Wrapper] = None,
) -> None:
    """Initialize logging backends for this process.

    Leaves the built-in default wrapper (structlog + Sentry) in place unless
    default_wrapper is given.
    """
    global _global_cfg
    _global_cfg = {
        "service_name": service_name,
        "environment": environment,
        "sentry_enabled": bool(sentry_dsn),
        "json_logs": json_logs,
    }

    if json_logs:
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer(),
            ],
        )
    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name, env=environment)

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            server_name=service_name or None,
            traces_sample_rate=sentry_traces_sample_rate,
        )

    if default_wrapper is not None:
        set_default(default_wrapper)
        _log.info("logwrap default wrapper replaced for %s", service_name or "<unnamed>")


def init_from_env(settings: Optional[LogwrapSettings] = None) -> LogwrapSettings:
    """Run init() from LOGWRAP_* settings and return them."""
    settings = settings or LogwrapSettings()
    init(
        service_name=settings.service_name,
        environment=settings.environment,
        sentry_dsn=settings.sentry_dsn,
        sentry_traces_sample_rate=settings.sentry_traces_sample_rate,
        json_logs=settings.json_logs,
        default_wrapper=settings.default_wrapper,
    )
    return settings


def config() -> Dict[str, Any]:
    return dict(_global_cfg)


def shutdown(timeout: float = 2.0) -> None:
    """Flush pending Sentry events."""
    if _global_cfg.get("sentry_enabled"):
        sentry_sdk.flush(timeout=timeout)
