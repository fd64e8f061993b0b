"""Tests for logging configuration."""

import logging

from common.logging_config import SensitiveDataFilter, setup_logging


def _record(msg, args=None):
    return logging.LogRecord('test', logging.INFO, __file__, 1, msg, args, None)


def test_bearer_credentials_are_masked():
    record = _record("Authorization header was Bearer secret-token")

    SensitiveDataFilter().filter(record)

    assert 'secret-token' not in record.msg
    assert '***MASKED***' in record.msg


def test_masks_arguments():
    record = _record("header %s", ("Bearer abc123",))

    SensitiveDataFilter().filter(record)

    assert record.args == ("Bearer ***MASKED***",)


def test_plain_messages_untouched():
    record = _record("Registered descriptor [name=a.txt]")

    SensitiveDataFilter().filter(record)

    assert record.msg == "Registered descriptor [name=a.txt]"


def test_setup_logging_is_idempotent():
    first = setup_logging('logging-test', log_level='debug')
    second = setup_logging('logging-test')

    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.DEBUG
