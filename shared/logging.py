"""Loguru setup shared by the API, the Lambda handler and the CLI."""

from __future__ import annotations
import sys
from typing import Optional

from loguru import logger

from .config import settings

PLAIN_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
)


def setup_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Args:
        level: Log level, defaults to ``settings.log_level``.
        json: Emit serialized JSON records (CloudWatch friendly),
            defaults to ``settings.log_json``.
    """
    logger.remove()
    level = (level or settings.log_level).upper()
    json = settings.log_json if json is None else json

    if json:
        logger.add(sys.stderr, level=level, serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(sys.stderr, level=level, format=PLAIN_FORMAT, backtrace=False, diagnose=False)
