"""Thread-backed scheduler for hosts that don't bring their own timers/events."""
import logging
import threading
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class ThreadTimer:
    def __init__(self, owner: "ThreadingScheduler", interval: float, callback: Callable[[], None],
                 repeat: bool, stop_on_map_change: bool):
        self.owner = owner
        self.interval = interval
        self.callback = callback
        self.repeat = repeat
        self.stop_on_map_change = stop_on_map_change
        self._cancelled = False
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _arm(self) -> None:
        self._timer = threading.Timer(self.interval, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self.callback()
        except Exception:
            logger.exception("Timer callback failed")
        if self.repeat and not self._cancelled:
            self._arm()
        else:
            self.owner._forget(self)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        self.owner._forget(self)


class ThreadingScheduler:
    def __init__(self):
        self._lock = threading.Lock()
        self._timers: List[ThreadTimer] = []
        self._round_start: List[Callable[[Any], Any]] = []
        self._map_start: List[Callable[[str], Any]] = []

    def add_timer(self, interval: float, callback: Callable[[], None],
                  repeat: bool = False, stop_on_map_change: bool = False) -> ThreadTimer:
        t = ThreadTimer(self, float(interval), callback, repeat, stop_on_map_change)
        with self._lock:
            self._timers.append(t)
        t._arm()
        return t

    def _forget(self, timer: ThreadTimer) -> None:
        with self._lock:
            if timer in self._timers:
                self._timers.remove(timer)

    def active_timers(self) -> List[ThreadTimer]:
        with self._lock:
            return list(self._timers)

    def on_round_start(self, handler: Callable[[Any], Any]) -> None:
        self._round_start.append(handler)

    def on_map_start(self, handler: Callable[[str], Any]) -> None:
        self._map_start.append(handler)

    def fire_round_start(self, event: Any = None) -> None:
        for handler in list(self._round_start):
            try:
                handler(event)
            except Exception:
                logger.exception("Round start handler failed")

    def change_map(self, map_name: str) -> None:
        for t in self.active_timers():
            if t.stop_on_map_change:
                t.cancel()
        for handler in list(self._map_start):
            try:
                handler(map_name)
            except Exception:
                logger.exception("Map start handler failed")

    def shutdown(self) -> None:
        for t in self.active_timers():
            t.cancel()
