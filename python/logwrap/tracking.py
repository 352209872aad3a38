# Error-tracking side of logwrap: per-context Sentry scopes with a global fallback.

from __future__ import annotations
from typing import Any, Optional

import sentry_sdk
from opentelemetry.context import Context, create_key, get_value, set_value

_SCOPE_KEY = create_key("logwrap-sentry-scope")


class WrappedLogError(Exception):
    """Reported to Sentry for every message logged through sentry_wrapper."""


def with_sentry_scope(scope: Any, context: Optional[Context] = None) -> Context:
    """Attach a Sentry scope (or hub) to context.

    Anything exposing capture_exception(error) is accepted.
    """
    return set_value(_SCOPE_KEY, scope, context)


def capture(context: Optional[Context], err: BaseException) -> None:
    scope = get_value(_SCOPE_KEY, context)
    if scope is not None:
        scope.capture_exception(err)
    else:
        sentry_sdk.capture_exception(err)
