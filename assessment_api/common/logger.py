"""
Application Logger

Every module of the assessment API logs through a child of the
``assessment_api`` logger, so one call to configure_logging() sets level,
format and destinations for the whole service. Records can be emitted as
plain text lines or as JSON objects for log collectors.
"""

import os
import sys
import json
import time
import logging
import datetime
import functools
import asyncio
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, TypeVar, Union

APP_LOGGER_NAME = "assessment_api"

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

F = TypeVar('F', bound=Callable[..., Any])

__all__ = [
    'APP_LOGGER_NAME',
    'JsonFormatter',
    'configure_logging',
    'get_logger',
    'app_logger',
    'log_execution_time'
]


class JsonFormatter(logging.Formatter):
    """
    Render each record as a single-line JSON object.

    Structured values passed as ``extra={"data": {...}}`` are merged into the
    object, e.g. the assessment name a service call worked on.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        data = getattr(record, "data", None)
        if isinstance(data, dict):
            payload.update(data)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_handlers(formatter: logging.Formatter, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            logging.getLogger(__name__).warning(f"Logging to stdout only, cannot open {log_file}: {e}")

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    level: Union[str, int] = logging.INFO,
    format_string: str = DEFAULT_LOG_FORMAT,
    use_json: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    (Re)configure the application logger.

    Existing handlers are replaced, so calling this once per created app is
    safe.

    Args:
        level: Level name or number
        format_string: Line format used when use_json is False
        use_json: Emit JSON objects instead of text lines
        log_file: Also write to this file

    Returns:
        The application logger
    """
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if use_json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(format_string, DEFAULT_DATE_FORMAT)

    logger.handlers = _build_handlers(formatter, log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module.

    Modules of this package (``assessment_api.*``) log under the application
    logger; any other name is returned as is.
    """
    if name.startswith(f"{APP_LOGGER_NAME}."):
        return app_logger.getChild(name[len(APP_LOGGER_NAME) + 1:])
    return logging.getLogger(name)


def _default_app_logger() -> logging.Logger:
    logger = logging.getLogger(APP_LOGGER_NAME)
    if logger.handlers:
        return logger
    return configure_logging(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        use_json=os.environ.get("LOG_JSON", "false").lower() == "true",
        log_file=os.environ.get("LOG_FILE"),
    )


app_logger = _default_app_logger()


@contextmanager
def _timed(logger: logging.Logger, label: str) -> Iterator[None]:
    start_time = time.time()
    try:
        yield
    except Exception as e:
        logger.debug(f"{label} failed after {time.time() - start_time:.3f}s: {e}")
        raise
    logger.debug(f"{label} took {time.time() - start_time:.3f}s")


def log_execution_time(logger: Optional[logging.Logger] = None) -> Callable[[F], F]:
    """
    Decorator logging, at DEBUG level, how long each call took.

    Works for plain functions and coroutines; failures are logged and
    re-raised.
    """
    def decorator(func: F) -> F:
        target = logger or app_logger
        label = func.__qualname__

        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _timed(target, label):
                    return await func(*args, **kwargs)
            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with _timed(target, label):
                return func(*args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator
