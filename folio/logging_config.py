"""Logging setup — stdlib logging with the request ID on every line."""

import logging

from folio.middleware import request_id_var

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


class RequestIDFilter(logging.Filter):
    """Copy the current request ID onto the log record ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``folio`` logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIDFilter())

    folio_logger = logging.getLogger("folio")
    folio_logger.handlers = [handler]
    folio_logger.setLevel(level.upper())
