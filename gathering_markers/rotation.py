from __future__ import annotations

from typing import Callable, Optional

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]
LoggerFn = Callable[..., None]

ROTATION_CEILING = 1000
ROTATION_INTERVAL_MS = 2000


def _noop_log(message: str, *args: object) -> None:
    return None


class RotationCounter:
    """Index used to cycle through a node's item labels."""

    def __init__(self, ceiling: int = ROTATION_CEILING) -> None:
        self._ceiling = ceiling
        self.value = 0

    def advance(self) -> int:
        self.value += 1
        if self.value > self._ceiling:
            self.value = 0
        return self.value


class RotationTimer:
    """Reschedules a tick callback on a Tk-style ``after`` loop."""

    def __init__(
        self,
        *,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        interval_ms: int = ROTATION_INTERVAL_MS,
        logger: Optional[LoggerFn] = None,
    ) -> None:
        self._after = after
        self._after_cancel = after_cancel
        self.interval_ms = max(50, int(interval_ms))
        self._logger = logger or _noop_log
        self._handle: object | None = None
        self._callback: Callable[[], None] | None = None
        self._active = False

    @property
    def running(self) -> bool:
        return self._active

    def start(self, callback: Callable[[], None]) -> object:
        self._callback = callback
        self.stop()
        self._active = True
        self._handle = self._after(self.interval_ms, self._run)
        self._logger("Rotation timer started (interval=%dms)", self.interval_ms)
        return self._handle

    def stop(self) -> None:
        self._active = False
        handle = self._handle
        self._handle = None
        if handle is not None:
            try:
                self._after_cancel(handle)
            except Exception:
                pass

    def _run(self) -> None:
        self._handle = None
        try:
            if self._callback is not None:
                self._callback()
        finally:
            # The callback may have stopped the timer.
            if self._active:
                self._handle = self._after(self.interval_ms, self._run)
