import math
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_STATUS_PATH = "server_status/status.json"
DEFAULT_INTERVAL = 30.0

# console variable names, as registered with the host
OUTPUT_CONVAR = "sv_status_output"
INTERVAL_CONVAR = "sv_status_interval"


def parse_interval(raw: Any) -> float:
    """Parse an update interval, falling back to the default when it is not a positive number."""
    try:
        interval = float(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_INTERVAL
    if not math.isfinite(interval) or interval <= 0:
        return DEFAULT_INTERVAL
    return interval


class StatusSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_path: str = DEFAULT_STATUS_PATH
    update_interval: float = DEFAULT_INTERVAL
    hostname_convar: str = "hostname"

    @field_validator("update_interval", mode="before")
    @classmethod
    def _interval(cls, v: Any) -> float:
        return parse_interval(v)

    @field_validator("output_path", mode="before")
    @classmethod
    def _output_path(cls, v: Any) -> str:
        path = str(v or "").strip()
        return path or DEFAULT_STATUS_PATH

    @staticmethod
    def from_env() -> "StatusSettings":
        return StatusSettings(
            output_path=os.getenv("SV_STATUS_OUTPUT", DEFAULT_STATUS_PATH),
            update_interval=os.getenv("SV_STATUS_INTERVAL", str(DEFAULT_INTERVAL)),
            hostname_convar=os.getenv("SV_STATUS_HOSTNAME_CONVAR", "hostname") or "hostname",
        )

    def with_convar(self, name: str, value: Any) -> "StatusSettings":
        """Return a copy with one console variable applied; unknown names raise KeyError."""
        if name == OUTPUT_CONVAR:
            return StatusSettings(**{**self.model_dump(), "output_path": value})
        if name == INTERVAL_CONVAR:
            return StatusSettings(**{**self.model_dump(), "update_interval": value})
        raise KeyError(name)


settings = StatusSettings.from_env()
