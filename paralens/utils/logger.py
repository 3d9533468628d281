"""
Logging configuration using Loguru.

Every record carries two extras: `module` (set by get_logger) and
`operation` (the analytics step or vault action being performed). Both are
printed on the console and kept in the serialized file sink.
"""

import sys
from pathlib import Path

from loguru import logger

DEFAULT_EXTRA = {"module": "paralens", "operation": "-"}

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>{extra[operation]}</magenta> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{function}:{line} | "
    "{extra[operation]} - {message}"
)


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = True,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """Configure console and rotating file sinks for a vault analysis run."""
    logger.remove()
    # Records from loggers without bindings still satisfy the formats
    logger.configure(extra=DEFAULT_EXTRA)

    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
        serialize=False,
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "paralens_{time:YYYY-MM-DD}.log",
            level=level,
            format=FILE_FORMAT,
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )


def get_logger(name: str, operation: str | None = None):
    """
    Get a logger bound to a module, and optionally to an operation.

    Per-call context goes through `.bind(...)` on the returned logger rather
    than keyword arguments, which loguru would feed to `str.format`.
    """
    if operation is None:
        return logger.bind(module=name)
    return logger.bind(module=name, operation=operation)
