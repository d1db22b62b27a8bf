"""
Status file publisher.

Serializes snapshots and writes them to disk on a small worker pool. All
writers share one lock, so overlapping triggers never interleave inside the
file; whichever publish takes the lock last leaves its snapshot on disk.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from .schemas import ServerSnapshot

logger = logging.getLogger(__name__)

LOG_TAG = "[ServerStatusPlugin]"
MAX_WORKERS = 4

# shared by every publisher in the process: there is one status file per server
_file_lock = threading.Lock()


def resolve_output_path(base_dir: Union[str, Path], configured: Union[str, Path]) -> Path:
    """Join the configured path onto the install directory (absolute paths win)."""
    return Path(base_dir) / configured


class StatusPublisher:
    """Writes snapshots to disk, synchronously or on background workers"""

    def __init__(self, max_workers: int = MAX_WORKERS, lock: Optional[threading.Lock] = None):
        self._lock = lock or _file_lock
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="status-publish")
        self._closed = False

    def publish(self, snapshot: ServerSnapshot, output_path: Union[str, Path]) -> bool:
        """Serialize and write one snapshot; returns False (after logging) on any failure."""
        path = Path(output_path)
        with self._lock:
            try:
                payload = snapshot.to_json()
                if not path.parent.exists():
                    path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("w", encoding="utf-8") as f:
                    f.write(payload)
            except (OSError, ValueError, TypeError) as e:
                logger.error("%s Failed to write status file %s: %s", LOG_TAG, path, e)
                return False
        logger.debug("%s Wrote %d players to %s", LOG_TAG, snapshot.player_count, path)
        return True

    def _run(self, snapshot: ServerSnapshot, output_path: Union[str, Path]) -> bool:
        try:
            return self.publish(snapshot, output_path)
        except Exception:
            # nothing may escape a background publish
            logger.exception("%s Unexpected error while publishing status", LOG_TAG)
            return False

    def submit(self, snapshot: ServerSnapshot, output_path: Union[str, Path]) -> "Future[bool]":
        """Queue a publish and return immediately; the future always resolves to a bool."""
        if not self._closed:
            try:
                return self._executor.submit(self._run, snapshot, output_path)
            except RuntimeError as e:
                logger.error("%s Publish not queued: %s", LOG_TAG, e)
        else:
            logger.error("%s Publish not queued: publisher is shut down", LOG_TAG)
        done: "Future[bool]" = Future()
        done.set_result(False)
        return done

    @property
    def closed(self) -> bool:
        return self._closed

    def shutdown(self, wait: bool = True) -> None:
        self._closed = True
        self._executor.shutdown(wait=wait)
