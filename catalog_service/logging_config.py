"""
Logging Configuration Module

Thread-safe logging setup for the catalog service and web layer: a
queue-based root handler plus silencing of chatty third-party libraries
(HTTP clients and the LLM SDKs used by the assistant).
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "urllib3",
    "openai",
    "langchain_core",
    "langchain_deepseek",
    "langchain_openai",
    "langchain_ollama",
    "werkzeug",
)


class _MuteHttpFilter(logging.Filter):
    """Drop raw HTTP request/response lines emitted by the LLM clients."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        name = record.name or ""
        if name.startswith("httpx") or name.startswith("httpcore"):
            return False
        msg = record.getMessage()
        return not (msg.startswith("HTTP Request:") or msg.startswith("HTTP Response:"))


class QueueLoggingConfig:
    """Routes every record through a queue drained by a single listener."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    @property
    def active(self) -> bool:
        return self._log_listener is not None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Configure the root logger.

        Calling this twice replaces the previous listener, so Flask's reloader
        does not end up with duplicated output.

        Args:
            debug: Whether to enable debug logging (engine traces included)
        """
        self.stop()

        self._log_queue = Queue()
        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            self._silence_noisy_libraries()

    def _silence_noisy_libraries(self) -> None:
        for handler in logging.getLogger().handlers:
            handler.addFilter(_MuteHttpFilter())

        for name in NOISY_LOGGERS:
            logger = logging.getLogger(name)
            if name in ("httpx", "httpcore"):
                logger.setLevel(logging.CRITICAL)
                logger.disabled = True
            else:
                logger.setLevel(logging.WARNING)

    def stop(self) -> None:
        """Stop the logging listener and cleanup."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        self._log_queue = None


# Global logging configuration instance
logging_config = QueueLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """Setup thread-safe logging configuration."""
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop the logging listener and cleanup."""
    logging_config.stop()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
