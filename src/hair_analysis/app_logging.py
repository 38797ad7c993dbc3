"""Logging configuration helpers."""

import logging

# Context keys attached via ``extra=`` by the handoff services.
CONTEXT_FIELDS = ("generation", "source", "hair_count", "confidence", "reason")


class ContextFormatter(logging.Formatter):
    """Formatter that appends known ``extra`` context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        ]
        if not context:
            return message
        return f"{message} [{' '.join(context)}]"


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("hair_analysis")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
