"""
Logging Setup Tests

Tests for the JSON formatter and queue-based logging configuration.
"""

import json
import logging
import logging.handlers
import sys

from utils.logging import CustomJsonFormatter, get_logger, setup_logging, stop_logging


def _make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="config.config_store",
        level=logging.WARNING,
        pathname=__file__,
        lineno=12,
        msg="Hostname resolution failed (%s)",
        args=("boom",),
        exc_info=None,
        func="resolve_hostname",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCustomJsonFormatter:
    """Test structured log formatting."""

    def test_emits_json_with_standard_fields(self):
        payload = json.loads(CustomJsonFormatter().format(_make_record()))

        assert payload["level"] == "WARNING"
        assert payload["module"] == "config.config_store"
        assert payload["funcName"] == "resolve_hostname"
        assert payload["lineno"] == 12
        assert payload["message"] == "Hostname resolution failed (boom)"
        assert "time" in payload

    def test_includes_config_key_when_present(self):
        record = _make_record(config_key="socket.host")
        payload = json.loads(CustomJsonFormatter().format(record))

        assert payload["config_key"] == "socket.host"

    def test_omits_config_key_when_absent(self):
        payload = json.loads(CustomJsonFormatter().format(_make_record()))

        assert "config_key" not in payload

    def test_includes_exception_text(self):
        try:
            raise OSError("lookup failed")
        except OSError:
            record = _make_record(exc_info=sys.exc_info())
        payload = json.loads(CustomJsonFormatter().format(record))

        assert "OSError: lookup failed" in payload["exc_info"]


class TestSetupLogging:
    """Test root logger configuration."""

    def test_installs_queue_handler(self, restore_root_logger):
        setup_logging("DEBUG")

        assert restore_root_logger.level == logging.DEBUG
        assert any(
            isinstance(h, logging.handlers.QueueHandler)
            for h in restore_root_logger.handlers
        )

    def test_invalid_level_defaults_to_info(self, restore_root_logger):
        setup_logging("SUPER_DEBUG")

        assert restore_root_logger.level == logging.INFO

    def test_repeated_setup_keeps_single_queue_handler(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("INFO")

        queue_handlers = [
            h
            for h in restore_root_logger.handlers
            if isinstance(h, logging.handlers.QueueHandler)
        ]
        assert len(queue_handlers) == 1

    def test_writes_json_lines_to_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "dash.log"
        setup_logging("INFO", log_file=str(log_file))

        get_logger("tests.logging").info("dashboard config ready")
        stop_logging()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        payloads = [json.loads(line) for line in lines]
        assert any(p["message"] == "dashboard config ready" for p in payloads)

    def test_numeric_level_accepted(self, restore_root_logger):
        setup_logging(logging.DEBUG)

        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_numeric_level_defaults_to_info(self, restore_root_logger):
        setup_logging(15)

        assert restore_root_logger.level == logging.INFO

    def test_stop_logging_detaches_queue_handler(self, restore_root_logger, capsys):
        """After stopping, records no longer pile up in an unread queue."""
        setup_logging("INFO")
        stop_logging()

        assert not [
            h
            for h in restore_root_logger.handlers
            if isinstance(h, logging.handlers.QueueHandler)
        ]

        log = get_logger("tests.logging")
        for i in range(1005):
            log.info("after stop %d", i)

        assert "Logging error" not in capsys.readouterr().err

    def test_stop_logging_is_idempotent(self, restore_root_logger):
        setup_logging("INFO")
        stop_logging()
        stop_logging()

        assert not any(
            isinstance(h, logging.handlers.QueueHandler)
            for h in restore_root_logger.handlers
        )

    def test_get_logger_returns_named_logger(self):
        assert get_logger("config.config_store") is logging.getLogger(
            "config.config_store"
        )
