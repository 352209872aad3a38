import logging

import pytest
from structlog.testing import capture_logs

from logwrap import WrapperConfigError, get_default, nop_wrapper, parse, set_default

from conftest import Recorder


def test_empty_is_current_default():
    rec = Recorder()
    set_default(rec)
    assert parse("") is rec
    assert parse(b"") is rec


def test_nop():
    assert parse("nop") is nop_wrapper
    assert parse(b"nop") is nop_wrapper


def test_std_logs_through_stderr_logger(monkeypatch):
    written = []
    monkeypatch.setattr(logging.Logger, "warning", lambda self, msg: written.append((self.name, msg)))
    parse("std")(None, "hello")
    assert written == [("logwrap.std", "hello")]


def test_structlog_defaults_to_info_without_pairs():
    with capture_logs() as logs:
        parse("structlog")(None, "m")
    assert logs == [{"event": "m", "log_level": "info"}]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("structlog:debug", "debug"),
        ("structlog:WARN", "warning"),
        ("structlog:Error", "error"),
        ("structlog:fatal", "critical"),
        ("structlog:", "info"),
        ("structlog:unknown", "info"),
    ],
)
def test_structlog_level(text, expected):
    with capture_logs() as logs:
        parse(text)(None, "m")
    assert logs == [{"event": "m", "log_level": expected}]


def test_structlog_level_and_pairs():
    with capture_logs() as logs:
        parse("structlog:warn:key1=value1,key2=value2")(None, "m")
    assert logs == [{"event": "m", "log_level": "warning", "key1": "value1", "key2": "value2"}]


def test_pair_value_keeps_extra_equals():
    with capture_logs() as logs:
        parse("structlog:info:query=a=b")(None, "m")
    assert logs[0]["query"] == "a=b"


def test_pairs_are_stripped():
    with capture_logs() as logs:
        parse("structlog:info: k1=v1 , k2=v2")(None, "m")
    assert logs[0]["k1"] == "v1"
    assert logs[0]["k2"] == "v2"


def test_structlog_disabled_level_is_nop():
    assert parse("structlog:nop") is nop_wrapper
    assert parse("structlog:NOP:k=v") is nop_wrapper


def test_sentry(sentry_calls):
    with capture_logs() as logs:
        parse("sentry")(None, "report me")
    assert logs == [{"event": "report me", "log_level": "error"}]
    assert [str(e) for e in sentry_calls] == ["report me"]


@pytest.mark.parametrize(
    "text, match",
    [
        ("structlog:info:key1=value1,key1=value2", "'key1' appeared at least twice"),
        ("structlog:info:badpair", 'no "=" in kv pair \'badpair\''),
        ("structlog:info:", 'no "=" in kv pair'),
        ("structlog:a:b:c", 'too many ":"'),
        ("bogus", "unsupported wrapper config: 'bogus'"),
        ("zap", "unsupported wrapper config"),
        ("NOP", "unsupported wrapper config"),
        (" nop", "unsupported wrapper config"),
        ("structlog:info:event=x", "reserved key 'event'"),
        ("structlog:warn:self=x", "reserved key 'self'"),
        (b"\xff\xfe", "not UTF-8"),
    ],
)
def test_malformed(text, match):
    with pytest.raises(WrapperConfigError, match=match):
        parse(text)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        parse("structlog:a:b:c")


def test_failed_parse_leaves_default_untouched():
    before = get_default()
    with pytest.raises(WrapperConfigError):
        parse("bogus")
    assert get_default() is before
