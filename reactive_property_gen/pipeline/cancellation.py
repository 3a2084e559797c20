"""Cooperative cancellation for a generation batch."""

from __future__ import annotations

import threading

from .errors import GenerationCancelledError


class CancellationToken:
    """Thread-safe cancellation flag checked between types of a batch."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancellation_requested(self) -> None:
        """Raise GenerationCancelledError if cancel() has been called."""
        if self._event.is_set():
            raise GenerationCancelledError("Generation was cancelled")

