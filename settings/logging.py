"""Logging configuration."""

import sys

from loguru import logger

from settings import LOG_DIR, LOG_LEVEL


def _is_ledger_event(record) -> bool:
    return record["name"].startswith(("app.services.voting.admission", "app.services.registry"))


def setup_logging(level: str = LOG_LEVEL, to_file: bool = True):
    """Configure stderr output, plus a daily log and a ledger audit log on disk.

    Request threads write concurrently, so every sink shows the thread name
    and file sinks are queued.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{thread.name}</cyan> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "election_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {thread.name} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
            enqueue=True,
        )
        # Vote casts, validity changes and registry mutations, kept longer
        logger.add(
            LOG_DIR / "ledger_audit.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}",
            level="INFO",
            filter=_is_ledger_event,
            rotation="50 MB",
            retention="90 days",
            compression="gz",
            enqueue=True,
        )
        logger.info("Logging to {}", LOG_DIR)

    return logger
