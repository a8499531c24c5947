"""Progress reporting and cooperative cancellation."""

from typing import Callable

from .exceptions import GenerationCancelled

# (current, total) -> keep going?
ProgressCallback = Callable[[int, int], bool]

PROGRESS_TOTAL = 100

# Bulk placement reports once per this many tiles
TICK_INTERVAL = 1000


class ProgressReporter:
    """Wraps the caller's progress callback for a single generation call.

    Reports are clamped to [0, 100] and never go backwards. A callback
    returning False raises GenerationCancelled at that checkpoint.
    """

    def __init__(self, callback: ProgressCallback | None = None):
        self.callback = callback
        self.last = 0
        self.reports: int = 0

    def report(self, current: int) -> None:
        """Report a milestone; raises GenerationCancelled if asked to stop."""
        value = self._advance(current)
        if self.callback is None:
            return
        self.reports += 1
        if not self.callback(value, PROGRESS_TOTAL):
            raise GenerationCancelled(value)

    def finish(self) -> None:
        """Report completion. The callback's answer no longer matters."""
        value = self._advance(PROGRESS_TOTAL)
        if self.callback is not None:
            self.reports += 1
            self.callback(value, PROGRESS_TOTAL)

    def tick(self, done: int, total: int, start: int, end: int) -> None:
        """Periodic report during bulk placement.

        Only fires every TICK_INTERVAL items; maps done/total onto the
        [start, end] progress span.
        """
        if done % TICK_INTERVAL != 0 or total <= 0:
            return
        self.report(start + int(done / total * (end - start)))

    def _advance(self, current: int) -> int:
        value = max(0, min(PROGRESS_TOTAL, int(current)))
        self.last = max(self.last, value)
        return self.last
