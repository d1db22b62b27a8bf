# server_status/plugin.py
import logging
import threading
from concurrent.futures import Future
from functools import partial
from pathlib import Path
from typing import Any, Optional

from .config import StatusSettings, settings as default_settings
from .models import GameServer, HookResult, Scheduler, TimerHandle
from .publisher import LOG_TAG, StatusPublisher, resolve_output_path
from .snapshot import build_snapshot

logger = logging.getLogger(__name__)


class ServerStatusPlugin:
    module_name = "ServerStatusPlugin"
    module_version = "2.0.0"
    module_author = "Kampfhamster"
    module_description = "Writes server status to JSON periodically and on round start"

    def __init__(self, server: GameServer, scheduler: Scheduler,
                 settings: Optional[StatusSettings] = None,
                 publisher: Optional[StatusPublisher] = None):
        self.server = server
        self.scheduler = scheduler
        self.settings = settings or default_settings
        self.publisher = publisher or StatusPublisher()
        self._timer: Optional[TimerHandle] = None
        self._timer_lock = threading.Lock()
        self._session = 0
        self._loaded = False
        self._hooks_registered = False

    # ----- lifecycle -----
    def load(self, hot_reload: bool = False) -> None:
        if self.publisher.closed:
            # a previous unload shut the pool down
            self.publisher = StatusPublisher()
        if not self._hooks_registered:
            self.scheduler.on_round_start(self.on_round_start)
            self.scheduler.on_map_start(self.on_map_start)
            self._hooks_registered = True
        self._loaded = True
        self.start_session()
        logger.info("%s Loaded v%s (hot_reload=%s), writing to %s every %.1fs",
                    LOG_TAG, self.module_version, hot_reload,
                    self.output_path(), self.settings.update_interval)

    def unload(self) -> None:
        with self._timer_lock:
            self._loaded = False
        self._cancel_timer()
        self.publisher.shutdown(wait=True)

    def start_session(self) -> None:
        """Arm a fresh timer for the current map; any previous one is dropped."""
        self._cancel_timer()
        with self._timer_lock:
            self._session += 1
            session = self._session
        self._arm_timer(session)

    def _arm_timer(self, session: int) -> None:
        with self._timer_lock:
            if not self._loaded or session != self._session:
                return
            # interval is read again on every rearm so console changes apply
            self._timer = self.scheduler.add_timer(
                self.settings.update_interval, partial(self._on_timer, session),
                repeat=False, stop_on_map_change=True,
            )

    def _cancel_timer(self) -> None:
        with self._timer_lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    # ----- triggers -----
    def _on_timer(self, session: int) -> None:
        try:
            self.trigger_publish()
        finally:
            self._arm_timer(session)

    def on_round_start(self, event: Any = None) -> HookResult:
        self.trigger_publish()
        return HookResult.CONTINUE

    def on_map_start(self, map_name: str = "") -> None:
        if self._loaded:
            self.start_session()

    def output_path(self) -> Path:
        return resolve_output_path(self.server.game_directory, self.settings.output_path)

    def trigger_publish(self) -> Optional["Future[bool]"]:
        """Capture state on the calling thread and hand the write to the publisher."""
        try:
            snapshot = build_snapshot(self.server, self.settings.hostname_convar)
            path = self.output_path()
        except Exception as e:
            logger.error("%s Could not capture server status: %s", LOG_TAG, e)
            return None
        return self.publisher.submit(snapshot, path)

    # ----- console -----
    def set_convar(self, name: str, value: Any) -> bool:
        try:
            self.settings = self.settings.with_convar(name, value)
        except KeyError:
            return False
        return True
