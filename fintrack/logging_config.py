"""Logging setup: plain-text records with any ``extra=`` fields appended as JSON."""
import json
import logging

_STANDARD_LOG_RECORD_KEYS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName", "levelname", "levelno",
        "lineno", "module", "msecs", "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "message", "thread", "threadName", "taskName",
        "asctime", "getMessage",
    )
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _format_extra(record: logging.LogRecord) -> str:
    extra = {k: getattr(record, k) for k in record.__dict__ if k not in _STANDARD_LOG_RECORD_KEYS}
    if not extra:
        return ""
    try:
        return " | " + json.dumps(extra, default=str)
    except (TypeError, ValueError):
        return " | " + str(extra)


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        suffix = _format_extra(record)
        return base + suffix if suffix else base


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h.formatter, ExtraFormatter) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ExtraFormatter(LOG_FORMAT))
    root.addHandler(handler)
