from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List


class PlayerRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    steam_id: str = Field(alias="steamId")
    score: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    connected_seconds: float = Field(alias="durationSeconds")
    connected_formatted: str = Field(alias="durationFormatted")


class ServerSnapshot(BaseModel):
    """One capture of server state, serialized with the camelCase keys dashboards read."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # declaration order is the key order of the written file
    map: str
    player_count: int = Field(alias="players")
    max_players: int = Field(alias="maxPlayers")
    server_name: str = Field(default="Unknown", alias="serverName")
    player_list: List[PlayerRecord] = Field(default_factory=list, alias="playerList")

    @model_validator(mode="after")
    def _count_matches_list(self) -> "ServerSnapshot":
        if self.player_count != len(self.player_list):
            raise ValueError(
                f"player_count {self.player_count} does not match {len(self.player_list)} listed players"
            )
        return self

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    @staticmethod
    def from_json(data: str) -> "ServerSnapshot":
        return ServerSnapshot.model_validate_json(data)
