import pytest
import structlog

from logwrap import wrapper

pytest_plugins = ["pytester", "logwrap.testing"]


class Recorder:
    """Stand-in wrapper that remembers every call."""

    def __init__(self, events=None, name="delegate"):
        self.calls = []
        self.events = events if events is not None else []
        self.name = name

    def __call__(self, context, msg):
        self.calls.append((context, msg))
        self.events.append((self.name, msg))


class FakeCounter:
    def __init__(self, events=None):
        self.total = 0.0
        self.events = events if events is not None else []

    def add(self, amount):
        self.total += amount
        self.events.append(("counter", amount))


class FakeScope:
    def __init__(self):
        self.captured = []

    def capture_exception(self, err):
        self.captured.append(err)


@pytest.fixture(autouse=True)
def restore_default():
    previous = wrapper.get_default()
    yield
    wrapper.set_default(previous)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def sentry_calls(monkeypatch):
    import sentry_sdk

    captured = []
    monkeypatch.setattr(sentry_sdk, "capture_exception", lambda err: captured.append(err))
    return captured
