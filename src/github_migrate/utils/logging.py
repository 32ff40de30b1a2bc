"""Loguru sinks for the migration CLI."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

RECORD_FORMAT = '{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]} | {message}'
CONSOLE_FORMAT = (
    '<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | '
    '<cyan>{extra[component]}</cyan> | <level>{message}</level>'
)


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None) -> None:
    """Send log records to stderr and, when given, to a rotating file.

    Components bind their name with ``logger.bind(component=...)``; records
    without one are tagged ``github-migrate``.
    """
    logger.remove()
    logger.configure(extra={'component': 'github-migrate'})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
        diagnose=level == 'DEBUG',
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=RECORD_FORMAT,
            level=level,
            rotation='10 MB',
            retention='30 days',
            compression='gz',
            diagnose=False,
        )
        logger.info(f'Writing log to {log_file}')
