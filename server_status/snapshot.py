# server_status/snapshot.py
import math
from typing import Any, List, Optional

from .models import GameServer, PlayerController
from .schemas import PlayerRecord, ServerSnapshot

UNKNOWN_SERVER_NAME = "Unknown"


def is_valid_player(player: PlayerController) -> bool:
    return (
        bool(player.is_valid)
        and not player.is_bot
        and not player.is_hltv
        and not player.is_replay
    )


def _finite_seconds(seconds: Any) -> float:
    try:
        value = float(seconds or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_duration(seconds: float) -> str:
    # hours keep counting past 23 instead of rolling into days
    total = max(0, int(_finite_seconds(seconds)))
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def _read(obj: Any, key: str, default: Any = None) -> Any:
    # host accessors may raise on unbound handles; one bad read costs a field, not the snapshot
    try:
        return getattr(obj, key, default)
    except Exception:
        return default


def _stat(stats: Any, key: str) -> int:
    if stats is None:
        return 0
    try:
        return int(_read(stats, key, 0) or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def player_record(player: PlayerController) -> PlayerRecord:
    stats = _read(player, "stats")
    seconds = _finite_seconds(_read(player, "connected_time", 0.0))
    return PlayerRecord(
        name=str(_read(player, "player_name", "") or ""),
        steam_id=str(_read(player, "steam_id", "")),
        score=_stat(stats, "score"),
        kills=_stat(stats, "kills"),
        deaths=_stat(stats, "deaths"),
        assists=_stat(stats, "assists"),
        connected_seconds=seconds,
        connected_formatted=format_duration(seconds),
    )


def server_name(server: GameServer, convar: str = "hostname") -> str:
    name: Optional[str] = server.find_convar(convar)
    if name is None or not str(name).strip():
        return UNKNOWN_SERVER_NAME
    return str(name)


def build_snapshot(server: GameServer, hostname_convar: str = "hostname") -> ServerSnapshot:
    # one pass over the roster; the count is taken from the same list
    records: List[PlayerRecord] = [player_record(p) for p in server.players() if is_valid_player(p)]
    return ServerSnapshot(
        map=server.map_name,
        player_count=len(records),
        max_players=int(server.max_players),
        server_name=server_name(server, hostname_convar),
        player_list=records,
    )
