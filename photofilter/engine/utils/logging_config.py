import asyncio
import logging
import logging.handlers
import os
import sys
import time
from functools import wraps
from typing import Any, List, Optional

DEFAULT_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - '
    '[%(filename)s:%(lineno)d] - %(message)s'
)
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Loggers that follow the configured level
ENGINE_LOGGERS = [
    "photofilter.engine.image_processing",
    "photofilter.core.services.filter_service",
    "photofilter.core.state",
]

# Third-party loggers held at WARNING
QUIET_LOGGERS = ["cv2", "asyncio", "concurrent.futures"]


def _parse_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def _build_handlers(log_file: Optional[str], max_file_size: int,
                    backup_count: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if not log_file:
        return handlers

    try:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        ))
    except OSError as e:
        logging.getLogger(__name__).warning(f"File logging disabled, cannot open {log_file}: {e}")
    return handlers


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Route the engine's and the filter service's logs to stdout and, when
    ``log_file`` is given, to a size-rotated file.

    Takes the keyword arguments produced by ``photofilter.core.config.get_log_config``.
    Replaces any handlers already on the root logger and returns it.
    """
    level = _parse_level(log_level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    for handler in _build_handlers(log_file, max_file_size, backup_count):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(level)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def describe_buffer(buffer: Any) -> str:
    """``WxHxC`` for a pixel buffer, ``no image`` for None, the type name otherwise"""
    if buffer is None:
        return "no image"
    if not hasattr(buffer, "channels"):
        return type(buffer).__name__
    return f"{buffer.width}x{buffer.height}x{buffer.channels}"


class FilterJobLogger:
    """Logs the lifecycle of filter jobs run off the caller's thread"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def job_started(self, operation: str, buffer: Any = None):
        self.logger.debug(f"{operation} started on {describe_buffer(buffer)}")

    def job_finished(self, operation: str, duration: float, result: Any = None):
        self.logger.info(f"{operation} finished in {duration:.3f}s -> {describe_buffer(result)}")

    def job_failed(self, operation: str, duration: float, error: Exception):
        self.logger.warning(f"{operation} failed after {duration:.3f}s: {type(error).__name__}: {error}")
        self.logger.debug("Job traceback:", exc_info=error)


def get_job_logger(name: str) -> FilterJobLogger:
    return FilterJobLogger(name)


def log_filter_job(job_logger: FilterJobLogger, operation: str):
    """
    Log start, duration and outcome of a call whose first positional argument
    after ``self`` is the operation kind and second is the source buffer.

    Works on both plain and ``async`` methods.
    """
    def label(args) -> str:
        kind = args[1] if len(args) > 1 else None
        return f"{operation}({kind.value})" if hasattr(kind, "value") else operation

    def source(args) -> Any:
        return args[2] if len(args) > 2 else None

    def decorator(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            name = label(args)
            job_logger.job_started(name, source(args))
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                job_logger.job_failed(name, time.time() - start_time, e)
                raise
            job_logger.job_finished(name, time.time() - start_time, result)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            name = label(args)
            job_logger.job_started(name, source(args))
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                job_logger.job_failed(name, time.time() - start_time, e)
                raise
            job_logger.job_finished(name, time.time() - start_time, result)
            return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
