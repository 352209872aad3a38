# Structured logging side of logwrap: levels, args and the context-scoped
# structlog accessor used by the structlog and sentry wrappers.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import structlog
from opentelemetry import trace
from opentelemetry.context import Context, create_key, get_value, set_value

_LOGGER_KEY = create_key("logwrap-logger")


class Level(str, Enum):
    """Severity used by structlog_wrapper.

    Lookup is case-insensitive; empty or unknown text resolves to INFO.
    DISABLED turns the wrapper into a no-op.
    """

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    PANIC = "panic"
    FATAL = "fatal"
    DISABLED = "nop"

    @classmethod
    def _missing_(cls, value: object) -> "Level":
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return cls.INFO


# structlog method per level. panic/fatal never raise or exit here.
_METHODS = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.PANIC: "critical",
    Level.FATAL: "critical",
}


def method_name(level: Level) -> str:
    return _METHODS.get(level, "info")


class WrapperConfigError(ValueError):
    """Raised when a wrapper config string cannot be parsed."""


# Names taken by structlog's emit signature, meth(self, event, **kw).
RESERVED_KEYS = frozenset({"self", "event"})


@dataclass(frozen=True)
class StructlogArgs:
    level: Level = Level.INFO
    kv_pairs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        reserved = sorted(RESERVED_KEYS.intersection(self.kv_pairs))
        if reserved:
            raise WrapperConfigError(f"reserved kv pair key(s) {reserved!r}: used by the structured logger")


def with_logger(logger: Any, context: Optional[Context] = None) -> Context:
    """Return a copy of context carrying logger for C() to find."""
    return set_value(_LOGGER_KEY, logger, context)


def C(context: Optional[Context] = None) -> Any:
    """Resolve the structlog logger for context.

    Falls back to the "logwrap" logger. When the context carries a valid
    span, trace_id and span_id are bound onto the returned logger.
    """
    logger = get_value(_LOGGER_KEY, context)
    if logger is None:
        logger = structlog.get_logger("logwrap")
    sc = trace.get_current_span(context).get_span_context()
    # loggers without bind still work, just without trace ids
    bind = getattr(logger, "bind", None)
    if sc.is_valid and bind is not None:
        logger = bind(
            trace_id=format(sc.trace_id, "032x"),
            span_id=format(sc.span_id, "016x"),
        )
    return logger
