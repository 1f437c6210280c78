"""
Unit tests for structured logging and decision logs.
"""

import json
import logging

from admission_webhook.admission.handler import ValidatingHandler
from admission_webhook.models.admission import Operation
from admission_webhook.observability.logging import (
    CorrelationIDFilter,
    StructuredFormatter,
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
    setup_structured_logging,
)
from admission_webhook.observability.metrics import MetricsCollector
from tests.fixtures.admission_resources import FakeValidator, make_request

HANDLER_LOGGER = "admission_webhook.admission.handler"


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="admission_webhook.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_formats_json_with_structured_fields(self):
        record = make_record(
            correlation_id="abc", operation="CREATE", allowed=False, unrelated="x"
        )

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["correlation_id"] == "abc"
        assert data["operation"] == "CREATE"
        assert data["allowed"] is False
        assert "unrelated" not in data


class TestCorrelationIds:
    def test_filter_uses_current_id(self):
        record = make_record()

        with correlation_scope("req-7"):
            CorrelationIDFilter().filter(record)

        assert record.correlation_id == "req-7"

    def test_scope_restores_previous_id(self):
        set_correlation_id("outer")

        with correlation_scope("inner") as corr_id:
            assert corr_id == "inner"
            assert get_correlation_id() == "inner"

        assert get_correlation_id() == "outer"

    def test_scope_generates_id_when_missing(self):
        with correlation_scope() as corr_id:
            assert len(corr_id) == 8


class TestSetup:
    def test_configures_root_and_webhook_loggers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_structured_logging(log_level="WARNING", webhook_log_level="DEBUG")

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
            assert logging.getLogger("admission_webhook").level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger("admission_webhook").setLevel(logging.NOTSET)


class TestDecisionLogs:
    def make_handler(self, validator):
        return ValidatingHandler(
            validator=validator, metrics=MetricsCollector(enabled=False)
        )

    def test_denial_logged_at_info(self, caplog):
        caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
        handler = self.make_handler(FakeValidator(error=ValueError("some error")))

        handler.handle(make_request(Operation.DELETE, uid="u-5"))

        records = [r for r in caplog.records if r.name == HANDLER_LOGGER]
        assert records[-1].levelno == logging.INFO
        assert records[-1].allowed is False
        assert records[-1].http_status == 403
        assert records[-1].request_uid == "u-5"
        assert "some error" in records[-1].getMessage()

    def test_decode_failure_logged_at_warning(self, caplog):
        caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
        handler = self.make_handler(FakeValidator())

        handler.handle(make_request(Operation.CREATE, obj=b"garbage"))

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].error_category == "decode"

class TestConfigureLogging:
    def test_configure_logging_from_settings(self):
        from admission_webhook.observability.logging import configure_logging
        from admission_webhook.settings import Settings

        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(
                Settings(LOG_LEVEL="ERROR", JSON_LOGS=False, _env_file=None)
            )

            assert root.level == logging.ERROR
            assert not isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger("admission_webhook").setLevel(logging.NOTSET)
