__all__ = [
    "Wrapper", "WrapperConfigError", "log", "as_message_logger", "parse",
    "get_default", "set_default",
    "nop_wrapper", "std_wrapper", "new_std_logger", "structlog_wrapper", "sentry_wrapper",
    "Level", "StructlogArgs", "C", "with_logger",
    "WrappedLogError", "with_sentry_scope",
    "Counter", "counter_wrapper", "failure_counter",
    "LogwrapSettings", "WrapperSetting",
    "init", "init_from_env", "shutdown",
]
__version__ = "0.1.0"

from .logging import C, Level, StructlogArgs, with_logger
from .tracking import WrappedLogError, with_sentry_scope
from .wrapper import (
    Wrapper, WrapperConfigError, as_message_logger, get_default, log, new_std_logger,
    nop_wrapper, parse, sentry_wrapper, set_default, std_wrapper, structlog_wrapper,
)
from .metrics import Counter, counter_wrapper, failure_counter
from .config import LogwrapSettings, WrapperSetting
from .bootstrap import init, init_from_env, shutdown
