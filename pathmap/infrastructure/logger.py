#!/usr/bin/env python3
"""Structured logging for pathmap.

All pathmap loggers live below the ``pathmap`` logger of the standard
``logging`` module. Components (repositories, stores) log through child
loggers such as ``pathmap.repository``; they install no handlers and
propagate to ``pathmap``, which the command-line tool configures once.
Embedding applications configure ``pathmap`` (or the root logger) the
usual way.

Messages carry key-value context rendered as a ``| key=value`` suffix:

    >>> logger = get_logger("repository")
    >>> logger.debug("Added resource", path="/css", new_rows=7)
    >>> with logger.add_context(command="rm"):
    ...     logger.debug("Removed resources", query="/css/*", removed=2)
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pathmap.core.constants import Limits

ROOT_LOGGER = "pathmap"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


class Logger:
    """Structured logger with context support.

    Wraps a standard ``logging.Logger``. Passing ``level`` or ``handlers``
    configures the wrapped logger; otherwise it is left as found, so
    creating a component logger never resets what an application set up.

    Context pushed with ``add_context`` is thread-local and shared by every
    Logger instance, so context set by the CLI also tags the messages of
    the repository it drives.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = ROOT_LOGGER,
        level: Optional[Union[LogLevel, str]] = None,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name (``pathmap`` or a dotted child of it)
            level: Minimum log level; None keeps the inherited level
            handlers: Handlers replacing the current ones. The logger then
                      stops propagating to its parent.
        """
        self.name = name
        self.logger = logging.getLogger(name)

        if level is not None:
            self.set_level(level)

        if handlers is not None:
            self.logger.handlers.clear()
            for handler in handlers:
                self.logger.addHandler(handler)
            self.logger.propagate = False

    @staticmethod
    def create_console_handler() -> logging.StreamHandler:
        """Create a stderr handler with the pathmap format."""
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        return handler

    @staticmethod
    def create_file_handler(
        filename: Union[str, Path],
        max_bytes: int = Limits.LOG_FILE_MAX_BYTES,
        backup_count: int = Limits.LOG_FILE_BACKUP_COUNT,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        """Add a new output handler."""
        self.logger.addHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or case-insensitive name)

        Raises:
            KeyError: If the name is not a log level
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        """Get the effective log level, inherited from parents if unset."""
        return LogLevel(self.logger.getEffectiveLevel())

    def _get_context(self) -> Dict[str, Any]:
        """Get current thread-local context, inner values winning."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context: Dict[str, Any] = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Args:
            **kwargs: Key-value pairs added to every message logged inside
                      the block, by any Logger on this thread
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return

        combined_context = self._get_context()
        combined_context.update(context)
        self.logger.log(
            level,
            self._format_message(msg, combined_context),
            extra={"context": combined_context},
        )

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)


def get_logger(component: Optional[str] = None) -> Logger:
    """Get the logger of a pathmap component.

    Args:
        component: Component name, e.g. "repository"; None for the
                   top-level ``pathmap`` logger

    Returns:
        Logger named ``pathmap.<component>`` (or ``pathmap``), left unconfigured
    """
    if component:
        return Logger(f"{ROOT_LOGGER}.{component}")
    return Logger(ROOT_LOGGER)


def configure_logging(
    level: Union[LogLevel, str] = LogLevel.INFO, log_file: Optional[Union[str, Path]] = None
) -> Logger:
    """Configure the top-level ``pathmap`` logger.

    Replaces its handlers with a console handler and, if ``log_file`` is
    given, a rotating file handler. Component loggers inherit the level.

    Args:
        level: Minimum log level
        log_file: Optional log file

    Returns:
        The configured top-level logger

    Raises:
        KeyError: If ``level`` names no log level
    """
    if isinstance(level, str):
        level = LogLevel[level.upper()]

    previous = logging.getLogger(ROOT_LOGGER)
    for handler in list(previous.handlers):
        previous.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [Logger.create_console_handler()]
    if log_file:
        handlers.append(Logger.create_file_handler(log_file))

    return Logger(ROOT_LOGGER, level=level, handlers=handlers)
