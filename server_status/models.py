"""Interfaces the host engine exposes to the plugin.

Nothing here is implemented by the plugin; the host supplies objects that
match these shapes (the tests use small fakes).
"""
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Protocol


class RoundStats(Protocol):
    score: int
    kills: int
    deaths: int
    assists: int


class PlayerController(Protocol):
    is_valid: bool
    is_bot: bool
    is_hltv: bool
    is_replay: bool
    player_name: str
    steam_id: Any  # numeric on most hosts, written as text
    connected_time: float  # seconds
    stats: Optional[RoundStats]  # None while the pawn is unbound


class GameServer(Protocol):
    map_name: str
    max_players: int
    game_directory: str

    def players(self) -> Iterable[PlayerController]: ...

    def find_convar(self, name: str) -> Optional[str]: ...


class HookResult(Enum):
    CONTINUE = 0
    STOP = 1


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def add_timer(
        self,
        interval: float,
        callback: Callable[[], None],
        repeat: bool = False,
        stop_on_map_change: bool = False,
    ) -> TimerHandle: ...

    def on_round_start(self, handler: Callable[[Any], Any]) -> None: ...

    def on_map_start(self, handler: Callable[[str], Any]) -> None: ...
