from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class SimulationError(Exception):
    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


INVALID_ROSTER = "INVALID_ROSTER"
EMPTY_POOL = "EMPTY_POOL"
INVALID_MATCHUP = "INVALID_MATCHUP"
DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
INVALID_CONFIG = "INVALID_CONFIG"
