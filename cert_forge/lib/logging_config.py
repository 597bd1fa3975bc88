"""JSON logging configuration for the tcf command line."""

import logging

from pythonjsonlogger import jsonlogger

OPERATOR_FIELDS = frozenset({"timestamp", "level", "message", "exc_info"})
SOURCE_FIELDS = frozenset({"funcName", "lineno"})


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter for people running tcf from a shell.

    Emits timestamp, level, message and exc_info. The emitting function and
    line number are added only when include_source is set (tcf --verbose).
    """

    def __init__(self, *args, include_source: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.include_source = include_source

    def add_fields(self, log_record, record, message_dict):
        """Override to include only operator-facing fields.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        allowed_fields = OPERATOR_FIELDS
        if self.include_source:
            allowed_fields = allowed_fields | SOURCE_FIELDS

        keys_to_remove = [key for key in log_record if key not in allowed_fields]
        for key in keys_to_remove:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Returns:
        Configured logger with CustomJsonFormatter
    """
    logger = logging.getLogger("cert_forge")

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def set_verbose(verbose: bool) -> None:
    """Switch LOGGER to DEBUG with source locations, or back to plain INFO."""
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in LOGGER.handlers:
        if isinstance(handler.formatter, CustomJsonFormatter):
            handler.formatter.include_source = verbose


LOGGER = _setup_logger()
