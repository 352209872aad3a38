# Counting wrapper calls. Any OpenTelemetry Counter satisfies Counter.

from __future__ import annotations
from typing import Optional, Protocol

from opentelemetry import metrics
from opentelemetry.context import Context

from .wrapper import Wrapper, log


class Counter(Protocol):
    def add(self, amount: float) -> None: ...


def counter_wrapper(delegate: Optional[Wrapper], counter: Counter) -> Wrapper:
    """Add 1 to counter, then log msg through delegate.

    This can't be built from a config string, so set it up in main after
    loading config, e.g.:

        settings = LogwrapSettings()
        tracing_logger = counter_wrapper(
            settings.default_wrapper,
            failure_counter("tracing_failures_total"),
        )
    """

    def _log(context: Optional[Context], msg: str) -> None:
        counter.add(1)
        log(delegate, context, msg)

    return _log


def failure_counter(name: str, description: str = "Calls to a logwrap wrapper") -> metrics.Counter:
    meter = metrics.get_meter("logwrap")
    return meter.create_counter(name=name, description=description, unit="1")
