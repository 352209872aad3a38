"""pytest support for library code that takes a Wrapper.

Enable it from a conftest.py:

    pytest_plugins = ["logwrap.testing"]

then request the ``testing_wrapper`` fixture and hand it to the code under
test. Every call marks the test as failed and records the message, but the
test keeps running, so one run reports all of them.
"""

from __future__ import annotations
from typing import Any, List, Optional, Protocol

import pytest
from opentelemetry.context import Context

from .wrapper import Wrapper

_REPORTER_KEY = pytest.StashKey["FailureReporter"]()


class TB(Protocol):
    def errorf(self, fmt: str, *args: Any) -> None: ...


class FailureReporter:
    """Collects non-fatal test failures."""

    def __init__(self) -> None:
        self.failures: List[str] = []

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def errorf(self, fmt: str, *args: Any) -> None:
        __tracebackhide__ = True
        self.failures.append(fmt % args if args else fmt)


def testing_wrapper(tb: TB) -> Wrapper:
    """A Wrapper that fails the test through tb each time it is called."""

    def _log(_: Optional[Context], msg: str) -> None:
        __tracebackhide__ = True
        tb.errorf("logger called with msg: %r", msg)

    return _log


# keep pytest from collecting the factory as a test
testing_wrapper.__test__ = False  # type: ignore[attr-defined]


@pytest.fixture
def log_failures(request: pytest.FixtureRequest) -> FailureReporter:
    reporter = FailureReporter()
    request.node.stash[_REPORTER_KEY] = reporter
    return reporter


@pytest.fixture(name="testing_wrapper")
def _testing_wrapper_fixture(log_failures: FailureReporter) -> Wrapper:
    return testing_wrapper(log_failures)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Any:
    outcome = yield
    report = outcome.get_result()
    reporter = item.stash.get(_REPORTER_KEY, None)
    if report.when != "call" or reporter is None or not reporter.failed:
        return
    calls = "\n".join(reporter.failures)
    if report.passed:
        report.outcome = "failed"
        report.longrepr = calls
    else:
        report.sections.append(("logwrap wrapper calls", calls))
