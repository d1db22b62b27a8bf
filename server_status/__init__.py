from .config import StatusSettings, parse_interval
from .plugin import ServerStatusPlugin
from .publisher import StatusPublisher, resolve_output_path
from .scheduler import ThreadingScheduler
from .schemas import PlayerRecord, ServerSnapshot
from .snapshot import build_snapshot, format_duration, is_valid_player

__version__ = "2.0.0"
