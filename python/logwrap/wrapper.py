"""Wrapper: a minimal callable for last-resort logging in library code.

Library code should not log. It should hand errors back to its caller and
let the caller decide what to do with them. In the rare cases where that is
not possible (say, a failure inside a background thread), the library takes a
Wrapper from its caller and calls it. Use one only when all three hold:

1. Something bad happened.
2. It was unexpected. Expected errors are retried or returned to the caller.
3. It is recoverable. Unrecoverable errors are also returned to the caller.

Services should use their logger directly and keep Wrapper for the libraries
they configure. In production, sentry_wrapper is the right choice in most
cases, since every call means something the service owner should know about.
For unit tests of library code, use testing_wrapper from logwrap.testing.

Callers should always pass the context they have, or None for the current
one, even though not every implementation looks at it.
"""

from __future__ import annotations
import logging
import sys
import threading
from typing import Callable, Optional, Union

from opentelemetry.context import Context

from .logging import RESERVED_KEYS, C, Level, StructlogArgs, WrapperConfigError, method_name
from .tracking import WrappedLogError, capture

Wrapper = Callable[[Optional[Context], str], None]

_STD_LOGGER_NAME = "logwrap.std"
_STD_FORMAT = "%(asctime)s %(message)s"
_STD_DATEFMT = "%Y/%m/%d %H:%M:%S"


def log(wrapper: Optional[Wrapper], context: Optional[Context], msg: str) -> None:
    """Nil-safe call of wrapper. None resolves to the process-wide default."""
    if wrapper is None:
        wrapper = get_default()
    wrapper(context, msg)


def as_message_logger(wrapper: Optional[Wrapper], context: Optional[Context] = None) -> Callable[[str], None]:
    """Bind wrapper to a fixed context for hooks that only take a message."""
    if wrapper is None:
        wrapper = get_default()
    bound = wrapper

    def _log(msg: str) -> None:
        bound(context, msg)

    return _log


def nop_wrapper(context: Optional[Context], msg: str) -> None:
    pass


def std_wrapper(logger: Optional[logging.Logger]) -> Wrapper:
    """Wrap a stdlib logger. None gives nop_wrapper."""
    if logger is None:
        return nop_wrapper

    def _log(_: Optional[Context], msg: str) -> None:
        logger.warning(msg)

    return _log


def new_std_logger() -> logging.Logger:
    """The stderr line logger behind the "std" config value."""
    logger = logging.getLogger(_STD_LOGGER_NAME)
    # exact type: subclasses such as pytest's capture handler don't count
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_STD_FORMAT, datefmt=_STD_DATEFMT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger


def structlog_wrapper(args: StructlogArgs = StructlogArgs()) -> Wrapper:
    """Log through the context's structlog logger at args.level with args.kv_pairs."""
    if args.level is Level.DISABLED:
        return nop_wrapper
    name = method_name(args.level)
    kv = dict(args.kv_pairs)

    def _log(context: Optional[Context], msg: str) -> None:
        getattr(C(context), name)(msg, **kv)

    return _log


def sentry_wrapper() -> Wrapper:
    """Log at error level through structlog and report the message to Sentry.

    The scope attached with with_sentry_scope is preferred over the global
    client. Without a configured Sentry client this behaves like
    structlog_wrapper at ERROR.
    """

    def _log(context: Optional[Context], msg: str) -> None:
        C(context).error(msg)
        capture(context, WrappedLogError(msg))

    return _log


def parse(text: Union[str, bytes]) -> Wrapper:
    """Build a Wrapper from a config string.

    Supported values:

    - "": the current default wrapper.
    - "nop": nop_wrapper.
    - "std": std_wrapper on new_std_logger().
    - "structlog": structlog_wrapper at INFO with no pairs.
    - "structlog:level:k1=v1,k2=v2": structlog_wrapper at the given level
      (case-insensitive) with the given pairs. The pairs part is optional,
      so "structlog:error" logs at ERROR with no pairs.
    - "sentry": sentry_wrapper.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError:
            raise WrapperConfigError(f"malformed wrapper config: not UTF-8: {text!r}") from None

    if text.startswith("structlog:"):
        parts = text.split(":")
        if len(parts) > 3:
            raise WrapperConfigError(f'malformed wrapper config: too many ":": {text!r}')
        pairs = {}
        if len(parts) > 2:
            for kv in parts[2].split(","):
                kv = kv.strip()
                key, sep, value = kv.partition("=")
                if not sep:
                    raise WrapperConfigError(f'malformed wrapper config: no "=" in kv pair {kv!r}')
                if key in pairs:
                    raise WrapperConfigError(f"malformed wrapper config: key {key!r} appeared at least twice")
                if key in RESERVED_KEYS:
                    raise WrapperConfigError(f"malformed wrapper config: reserved key {key!r} in kv pair {kv!r}")
                pairs[key] = value
        return structlog_wrapper(StructlogArgs(level=Level(parts[1]), kv_pairs=pairs))

    if text == "":
        return get_default()
    if text == "nop":
        return nop_wrapper
    if text == "std":
        return std_wrapper(new_std_logger())
    if text == "structlog":
        return structlog_wrapper()
    if text == "sentry":
        return sentry_wrapper()
    raise WrapperConfigError(f"unsupported wrapper config: {text!r}")


_default_lock = threading.Lock()
_default: Wrapper = sentry_wrapper()


def get_default() -> Wrapper:
    with _default_lock:
        return _default


def set_default(wrapper: Wrapper) -> Wrapper:
    """Replace the process-wide default and return the previous one."""
    global _default
    if wrapper is None:
        raise ValueError("default wrapper cannot be None")
    with _default_lock:
        previous, _default = _default, wrapper
    return previous
