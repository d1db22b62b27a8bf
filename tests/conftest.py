from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pytest

from server_status.config import StatusSettings
from server_status.publisher import StatusPublisher


@dataclass
class FakeStats:
    score: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0


@dataclass
class FakePlayer:
    player_name: str = "player"
    steam_id: Any = 76561198000000000
    connected_time: float = 0.0
    stats: Optional[FakeStats] = None
    is_valid: bool = True
    is_bot: bool = False
    is_hltv: bool = False
    is_replay: bool = False


@dataclass
class FakeServer:
    game_directory: str
    map_name: str = "de_dust2"
    max_players: int = 10
    roster: List[FakePlayer] = field(default_factory=list)
    convars: Dict[str, str] = field(default_factory=lambda: {"hostname": "Test Server"})

    def players(self):
        return iter(self.roster)

    def find_convar(self, name: str) -> Optional[str]:
        return self.convars.get(name)


class FakeTimer:
    def __init__(self, interval, callback, repeat, stop_on_map_change):
        self.interval = interval
        self.callback = callback
        self.repeat = repeat
        self.stop_on_map_change = stop_on_map_change
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Records registrations; tests fire them by hand."""

    def __init__(self):
        self.timers: List[FakeTimer] = []
        self.round_start: List[Callable] = []
        self.map_start: List[Callable] = []

    def add_timer(self, interval, callback, repeat=False, stop_on_map_change=False):
        t = FakeTimer(interval, callback, repeat, stop_on_map_change)
        self.timers.append(t)
        return t

    def on_round_start(self, handler):
        self.round_start.append(handler)

    def on_map_start(self, handler):
        self.map_start.append(handler)

    def live_timers(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]


@pytest.fixture
def server(tmp_path):
    return FakeServer(
        game_directory=str(tmp_path / "csgo"),
        roster=[
            FakePlayer("alice", 76561198000000001, 125.0, FakeStats(10, 3, 1, 2)),
            FakePlayer("bob", 76561198000000002, 3661.5, None),
            FakePlayer("BOT Carl", 0, 50.0, FakeStats(1, 1, 1, 1), is_bot=True),
            FakePlayer("SourceTV", 0, 9000.0, None, is_hltv=True),
        ],
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def publisher():
    pub = StatusPublisher(max_workers=4)
    yield pub
    pub.shutdown(wait=True)


@pytest.fixture
def status_settings():
    return StatusSettings(output_path="server_status/status.json", update_interval=30.0)
