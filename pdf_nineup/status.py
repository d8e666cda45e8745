"""Progress reporting sinks."""

from __future__ import annotations

from typing import Callable, List, Protocol

from .utils import get_logger

LOGGER = get_logger("pdf_nineup.status")


class StatusSink(Protocol):
    """Receives human-readable progress messages. Fire-and-forget."""

    def report(self, message: str) -> None:
        """Publish ``message``."""


class LoggingStatusSink:
    """Forward status messages to the package logger."""

    def report(self, message: str) -> None:
        LOGGER.info(message)


class CallbackStatusSink:
    """Forward status messages to an arbitrary callable."""

    def __init__(self, callback: Callable[[str], object]) -> None:
        self.callback = callback

    def report(self, message: str) -> None:
        self.callback(message)


class RecordingStatusSink:
    """Keep every message in memory, handy for tests and summaries."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)
