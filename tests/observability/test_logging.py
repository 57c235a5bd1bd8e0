"""
Test suite for logging helpers and correlation ids.

System role: Verification of observability utilities
"""

import logging

import pytest

from notchy.observability import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)
from notchy.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    preview,
    safe_log_value,
)
from notchy.observability.logger import CorrelationIdFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    def test_should_summarise_sequences(self) -> None:
        """Should log vectors by size only."""
        assert safe_log_value([0.1] * 1536) == "list(1536 items)"
        assert safe_log_value({"a": 1, "b": 2}) == "dict(2 keys)"

    def test_should_truncate_long_strings(self) -> None:
        """Should cut long values and report the original length."""
        value = safe_log_value("x" * 600, max_length=10)

        assert value == "x" * 10 + "... (truncated, 600 total)"

    def test_should_render_none(self) -> None:
        assert safe_log_value(None) == "None"


class TestPreview:
    """Test suite for preview."""

    def test_should_flatten_whitespace(self) -> None:
        assert preview("a\n\n b\tc") == "a b c"

    def test_should_shorten_to_max_length(self) -> None:
        assert preview("abcdefghij", max_length=6) == "abc..."

    def test_should_return_empty_for_none(self) -> None:
        assert preview(None) == ""


class TestLogWithContext:
    """Test suite for the structured logging helpers."""

    def test_log_with_context_should_attach_safe_extras(self, caplog) -> None:
        """Should attach summarised values as record attributes."""
        logger = logging.getLogger("notchy.tests.log_utils")

        with caplog.at_level(logging.INFO, logger="notchy.tests.log_utils"):
            log_with_context(logger, logging.INFO, "Embedded", vector=[1.0, 2.0], source_key="a.pdf")

        record = caplog.records[-1]
        assert record.vector == "list(2 items)"
        assert record.source_key == "a.pdf"

    def test_log_exception_with_context_should_record_error_type(self, caplog) -> None:
        """Should log at error level with the exception attached."""
        logger = logging.getLogger("notchy.tests.log_utils")

        try:
            raise ConnectionError("database unavailable")
        except ConnectionError as e:
            log_exception_with_context(logger, "Error saving message", e, chat_id=3)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ConnectionError"
        assert record.error_msg == "database unavailable"
        assert record.chat_id == "3"
        assert record.exc_info is not None


class TestCorrelationId:
    """Test suite for correlation id helpers."""

    def test_should_generate_id_when_none_given(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
        clear_correlation_id()
        assert get_correlation_id() == ""

    def test_filter_should_stamp_records(self) -> None:
        """Should add the current id, or a dash outside requests."""
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        set_correlation_id("abc")
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "abc"

        clear_correlation_id()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_should_install_single_handler(self, restore_root_logger) -> None:
        """Should replace existing handlers on repeated calls."""
        configure_logging("debug")
        configure_logging("warning")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING
        assert logging.getLogger("botocore").level == logging.WARNING
