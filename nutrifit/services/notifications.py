import logging
from typing import Protocol

logger = logging.getLogger("nutrifit.notifications")


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Writes user-facing notifications to the log instead of a toast."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.warning(message)
