"""Tests for logging configuration."""

import logging

from hair_analysis.app_logging import ContextFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="hair_analysis.services.sessions",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Analysis complete",
        args=None,
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("hair_analysis")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging("debug")
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0].formatter, ContextFormatter)
    logger.handlers.clear()


def test_formatter_appends_handoff_context() -> None:
    formatter = ContextFormatter("%(levelname)s: %(name)s: %(message)s")

    line = formatter.format(_record(source="fallback", hair_count=91000))

    assert line == (
        "INFO: hair_analysis.services.sessions: Analysis complete "
        "[source=fallback hair_count=91000]"
    )


def test_formatter_without_context_is_unchanged() -> None:
    formatter = ContextFormatter("%(levelname)s: %(message)s")

    assert formatter.format(_record()) == "INFO: Analysis complete"
