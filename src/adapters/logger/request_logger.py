"""
Logging request logger adapter - Implements RequestLogger protocol.

This module provides a stdlib-logging implementation of the domain's
request logger port. The structured context travels as the "context"
extra on the log record, where JSONFormatter picks it up.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LoggingRequestLogger:
    """
    Implements RequestLogger protocol via stdlib logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Unknown level names are logged at INFO.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def log(self, level: str, message: str, context: dict[str, Any]) -> None:
        self._logger.log(_LEVELS.get(level.lower(), logging.INFO), message, extra={"context": context})
