"""Logging setup for the exporter process.

Diagnostic context is attached to log calls through `extra=`. The
formatter here appends those extra fields to the message as key=value
pairs so a failing token or container can be identified from the log
line alone.
"""

import logging
import sys

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
        "color_message",
    }
)

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def extra_fields(record: logging.LogRecord) -> dict[str, str | int | float | bool]:
    """Return the extra attributes passed via the logging call.

    Args:
        record: The log record to inspect.

    Returns:
        Mapping of non-standard attribute names to scalar values.
    """
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOGRECORD_ATTRS
        and isinstance(value, (str, int, float, bool))
    }


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends extra fields to the message.

    Example:
        ```python
        logger.warning("Bad token", extra={"token": "12XB"})
        # 2024-01-01 12:00:00,000 WARNING app: Bad token token='12XB'
        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = extra_fields(record)
        if not fields:
            return message
        suffix = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        # Keep the traceback, if any, after the fields
        head, sep, tail = message.partition("\n")
        return f"{head} {suffix}{sep}{tail}"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a KeyValueFormatter handler on the root logger.

    Replaces existing root handlers so the call is idempotent.

    Args:
        level: Log level name or number for the root logger.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(KeyValueFormatter(DEFAULT_FORMAT))
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
