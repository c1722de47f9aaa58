"""Notification backends."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    """Writes one ``[CPPI] EVENT: message`` line per notification.

    Defaults to stderr so the tick report on stdout stays machine readable.
    """

    prefix: str = "[CPPI]"
    stream: TextIO = field(default_factory=lambda: sys.stderr)

    def notify(self, event: str, message: str) -> None:
        self.stream.write(f"{self.prefix} {event}: {message}\n")
        self.stream.flush()


@dataclass
class MemoryNotifier(Notifier):
    """Keeps notifications in memory; used for dry runs and tests."""

    events: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))
