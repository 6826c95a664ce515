"""Tests for pvemcp structured logging."""

import json
import logging
import sys

from pvemcp.logging import PveFormatter, configure_logging, get_logger
from pvemcp.sanitizer import REDACTED, register_secret


def _record(msg, name="pvemcp.client", level=logging.INFO, args=()):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestPveFormatter:
    def test_human_readable_format(self):
        output = PveFormatter(json_output=False).format(_record("Connected"))
        assert "pvemcp.client" in output
        assert "Connected" in output
        assert "INFO" in output

    def test_json_format(self):
        output = PveFormatter(json_output=True).format(
            _record("Tool failed", name="pvemcp.tools", level=logging.WARNING)
        )
        data = json.loads(output)
        assert data["logger"] == "pvemcp.tools"
        assert data["message"] == "Tool failed"
        assert data["level"] == "WARNING"
        assert "timestamp" in data

    def test_extra_fields_in_human_format(self):
        record = _record("GET /nodes -> 200")
        record.method = "GET"  # type: ignore[attr-defined]
        record.status_code = 200  # type: ignore[attr-defined]
        output = PveFormatter().format(record)
        assert "method=GET" in output
        assert "status_code=200" in output

    def test_unknown_extras_ignored(self):
        record = _record("hello")
        record.favourite_colour = "blue"  # type: ignore[attr-defined]
        assert "favourite_colour" not in PveFormatter().format(record)

    def test_registered_secret_redacted(self):
        register_secret("s3cr3t-token-value")
        output = PveFormatter().format(_record("token was %s", args=("s3cr3t-token-value",)))
        assert "s3cr3t-token-value" not in output
        assert REDACTED in output

    def test_json_output_redacted(self):
        register_secret("s3cr3t-token-value")
        record = _record("failed")
        record.path = "/access/users?token=s3cr3t-token-value"  # type: ignore[attr-defined]
        output = PveFormatter(json_output=True).format(record)
        assert "s3cr3t-token-value" not in output
        assert json.loads(output)["path"] == f"/access/users?token={REDACTED}"

    def test_auth_header_redacted(self):
        output = PveFormatter().format(_record("sent Authorization: PVEAPIToken=a@pam!b=c"))
        assert "a@pam!b=c" not in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("pvemcp.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "pvemcp.test"

    def test_default_name(self):
        assert get_logger().name == "pvemcp"


class TestConfigureLogging:
    def test_configure_info(self):
        configure_logging(level="INFO")
        assert get_logger("pvemcp").level == logging.INFO

    def test_configure_debug(self):
        configure_logging(level="DEBUG")
        assert get_logger("pvemcp").level == logging.DEBUG
        configure_logging(level="INFO")

    def test_handler_writes_to_stderr(self):
        configure_logging()
        logger = get_logger("pvemcp")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is sys.stderr
        assert logger.propagate is False

    def test_configure_json(self):
        configure_logging(json_output=True)
        formatter = get_logger("pvemcp").handlers[0].formatter
        assert isinstance(formatter, PveFormatter)
        assert formatter._json_output is True

        configure_logging(json_output=False)
