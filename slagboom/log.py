"""Logging with loguru."""

import sys
import inspect
import logging
from enum import StrEnum
from pathlib import Path

from loguru import logger

# stdlib loggers that should end up in loguru
REDIRECTED = ("uvicorn", "uvicorn.error", "uvicorn.access", "starlette")


class LoguruHandler(logging.Handler):
    """Stdlib logging handler that passes records on to loguru.

    The stdlib logger name becomes the logtype, so uvicorn access logs show
    up as ``uvicorn.access``.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # find the caller outside of the logging module
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            logtype=record.name
        ).log(level, record.getMessage())


# log levels as an enum for use with typer
LogLevels = StrEnum("LogLevels", list(logger._core.levels.keys()))

LOGFMT_CONSOLE = (
    "<light-black>{time:YYYY-MM-DD HH:mm:ss}</light-black>"
    " | <level>{level: <8}</level>"
    " | {extra[logtype]: <14}"
    " | {message}"
)
LOGFMT_CONSOLE_DEBUG = (
    "<light-black>{time:YYYY-MM-DD HH:mm:ss}</light-black>"
    " | <level>{level: <8}</level>"
    " | {extra[logtype]: <14}"
    " | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    " - {message}"
)
LOGFMT_FILE = (
    "{time:YYYY-MM-DD HH:mm:ss}"
    " | {level: <8}"
    " | {extra[logtype]: <14}"
    " | {message}"
)
LOGFMT_FILE_DEBUG = (
    "{time:YYYY-MM-DD HH:mm:ss}"
    " | {level: <8}"
    " | {extra[logtype]: <14}"
    " | {name}:{function}:{line}"
    " - {message}"
)


def redirect_stdlib_logging() -> None:
    """Send stdlib logging, uvicorn included, to loguru."""
    logging.basicConfig(handlers=[LoguruHandler()], level=0, force=True)
    for name in REDIRECTED:
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True


def remove_old_logs(log_dir: Path, retention: int) -> None:
    """Retention is only applied on rotation, so also apply it at startup."""
    logs = sorted(
        log_dir.glob("slagboom-*.log"), key=lambda p: (-p.stat().st_mtime, p)
    )
    for old in logs[retention:]:
        old.unlink(missing_ok=True)


def init_logger(
    loglevel: LogLevels,
    log_dir: Path | None = None,
    rotation: str = "00:00",
    retention: int = 5,
) -> bool:
    """Initialize the logger, return the debug flag."""
    redirect_stdlib_logging()

    debug = logger.level(loglevel.name).no <= logger.level("DEBUG").no

    # sublogger per component: logger.bind(logtype="slagboom.xxx")
    logger.configure(handlers=[], extra={"logtype": "slagboom"})

    if debug or log_dir is None:
        logger.add(
            sys.stderr,
            format=LOGFMT_CONSOLE_DEBUG if debug else LOGFMT_CONSOLE,
            level=loglevel.name,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "slagboom-{time:YYYY-MM-DD}.log",
            format=LOGFMT_FILE_DEBUG if debug else LOGFMT_FILE,
            level=loglevel.name,
            enqueue=True,
            encoding="utf-8",
            rotation=rotation,
            retention=retention,
        )
        remove_old_logs(log_dir, retention)

    return debug
