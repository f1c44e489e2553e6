"""Cooperative cancellation"""

import threading

from ..exceptions import CancellationError


class CancellationToken:
    """Flag shared between the UI thread and a running research task"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancellationError("Research run cancelled")
