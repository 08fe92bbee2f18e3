"""
Logging setup for the invoice sender.

Progress messages go to stdout; an optional log file keeps a copy of each run.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that are too chatty at DEBUG
QUIET_LOGGERS = ('urllib3', 'PIL')


def setup_logging(
    level: str = 'INFO',
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure the root logger for a submission run.

    Args:
        level: Level name; unknown names fall back to INFO
        format_string: Record format (DEFAULT_FORMAT if None)
        log_file: Also append records to this file, creating its directory
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_from_settings(settings, verbose: bool = False) -> None:
    """Apply the logging section of Settings; verbose forces DEBUG."""
    setup_logging(
        level='DEBUG' if verbose else settings.log_level,
        format_string=settings.log_format,
        log_file=settings.log_file
    )
