from __future__ import annotations

"""What a caller writes back after a game (fatigue, morale, box score rows).

The engine never touches a store; these helpers turn a SimulationResult into
plain rows the caller persists however it likes.
"""

from typing import Any, Dict, List

import pandas as pd

from matchengine.core import clamp
from matchengine.models import SimulationResult
from schema import COUNT_STATS, LINE_MINUTES, PLAYER_LINE_KEYS

MORALE_MIN = 0
MORALE_MAX = 100


def morale_delta(team_id: str, winner_team_id: str, loser_team_id: str) -> int:
    if team_id == winner_team_id:
        return 1
    if team_id == loser_team_id:
        return -1
    return 0


def apply_morale_delta(morale: int, delta: int) -> int:
    return int(clamp(morale + delta, MORALE_MIN, MORALE_MAX))


def build_player_updates(result: SimulationResult) -> List[Dict[str, Any]]:
    """One {player_id, fatigue, morale_delta} row per player line."""
    return [
        {
            "player_id": line.player_id,
            "fatigue": line.fatigue,
            "morale_delta": morale_delta(line.team_id, result.winner_team_id, result.loser_team_id),
        }
        for line in result.player_lines
    ]


def box_score_frame(result: SimulationResult) -> pd.DataFrame:
    """Player lines as a DataFrame plus games_played (1 only if the player logged minutes)."""
    df = pd.DataFrame([line.to_dict() for line in result.player_lines], columns=list(PLAYER_LINE_KEYS))
    df["games_played"] = (df[LINE_MINUTES] > 0).astype(int)
    df["game_id"] = result.game_id
    return df


def team_totals(result: SimulationResult) -> pd.DataFrame:
    """Summed counting stats per team, indexed by team_id."""
    df = box_score_frame(result)
    return df.groupby("team_id")[list(COUNT_STATS)].sum()
