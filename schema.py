# schema.py
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, NewType, Tuple, TypedDict

from config import PLAY_LOG_LIMIT

# ============================================================================
# 0) Single Source of Truth: IDs / Versions
# ============================================================================

SCHEMA_VERSION: str = "1.0"

# IMPORTANT:
# - Always treat IDs as str. Never use int keys for players/teams.
# - IDs come from the caller's store (opaque strings); the engine never rewrites them.
PlayerId = NewType("PlayerId", str)
TeamId = NewType("TeamId", str)


# ============================================================================
# 1) Box score line keys
# ============================================================================

LINE_PLAYER_ID = "player_id"
LINE_TEAM_ID = "team_id"
STAT_POINTS = "points"
STAT_REBOUNDS = "rebounds"
STAT_ASSISTS = "assists"
STAT_TURNOVERS = "turnovers"
LINE_MINUTES = "minutes"
LINE_FATIGUE = "fatigue"

# Countable stats (safe to sum across games)
COUNT_STATS: Tuple[str, ...] = (STAT_POINTS, STAT_REBOUNDS, STAT_ASSISTS, STAT_TURNOVERS)

PLAYER_LINE_KEYS: Tuple[str, ...] = (
    LINE_PLAYER_ID,
    LINE_TEAM_ID,
    *COUNT_STATS,
    LINE_MINUTES,
    LINE_FATIGUE,
)


# ============================================================================
# 2) SimulationResult dict form (what callers persist)
# ============================================================================

class PlayerLineDict(TypedDict):
    player_id: str
    team_id: str
    points: int
    rebounds: int
    assists: int
    turnovers: int
    minutes: int
    fatigue: int


class SimulationMetaDict(TypedDict):
    schema_version: str
    engine_version: str
    game_id: str
    home_team_id: str
    away_team_id: str
    overtime_periods: int
    regulation_ticks: int


class SimulationResultDict(TypedDict):
    home_score: int
    away_score: int
    winner_team_id: str
    loser_team_id: str
    play_log: List[str]
    player_lines: List[PlayerLineDict]
    meta: SimulationMetaDict


# ============================================================================
# 3) Normalization / Validation Utilities
# ============================================================================

def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def normalize_team_id(value: Any) -> TeamId:
    """Trim and stringify a team id; empty ids are rejected."""
    if value is None:
        raise ValueError("team_id is empty")
    s = str(value).strip()
    if not s:
        raise ValueError("team_id is empty")
    return TeamId(s)


def normalize_player_id(value: Any) -> PlayerId:
    if value is None:
        raise ValueError("player_id is empty")
    s = str(value).strip()
    if not s:
        raise ValueError("player_id is empty")
    return PlayerId(s)


def assert_unique_ids(ids: Iterable[str], *, what: str = "player_id") -> None:
    seen: set[str] = set()
    dups: set[str] = set()
    for x in ids:
        if x in seen:
            dups.add(x)
        seen.add(x)
    if dups:
        raise ValueError(f"duplicate {what}: {sorted(dups)!r}")


def assert_simulation_result_shape(result: Mapping[str, Any]) -> None:
    """
    Structural checks for SimulationResultDict.
    This is intentionally strict: if it fails, fix upstream rather than guessing.
    """
    if not isinstance(result, Mapping):
        raise ValueError("SimulationResult must be a dict-like mapping")

    for k in ("home_score", "away_score", "winner_team_id", "loser_team_id", "play_log", "player_lines", "meta"):
        if k not in result:
            raise ValueError(f"SimulationResult missing '{k}'")

    home_score = result["home_score"]
    away_score = result["away_score"]
    if not _is_number(home_score) or not _is_number(away_score):
        raise ValueError("SimulationResult scores must be numbers")

    meta = result["meta"]
    if not isinstance(meta, Mapping):
        raise ValueError("SimulationResult.meta must be a dict")
    if meta.get("schema_version") != SCHEMA_VERSION:
        raise ValueError(f"SimulationResult.meta.schema_version must be '{SCHEMA_VERSION}'")

    home_id = str(meta.get("home_team_id"))
    away_id = str(meta.get("away_team_id"))
    winner = str(result["winner_team_id"])
    loser = str(result["loser_team_id"])
    if {winner, loser} != {home_id, away_id}:
        raise ValueError("SimulationResult winner/loser must be the two team ids")
    winner_score = home_score if winner == home_id else away_score
    loser_score = away_score if winner == home_id else home_score
    if winner_score < loser_score:
        raise ValueError("SimulationResult winner score must be >= loser score")

    play_log = result["play_log"]
    if not isinstance(play_log, list):
        raise ValueError("SimulationResult.play_log must be a list")
    if len(play_log) > PLAY_LOG_LIMIT:
        raise ValueError(f"SimulationResult.play_log exceeds {PLAY_LOG_LIMIT} entries")

    lines = result["player_lines"]
    if not isinstance(lines, list):
        raise ValueError("SimulationResult.player_lines must be a list")
    for i, row in enumerate(lines):
        if not isinstance(row, Mapping):
            raise ValueError(f"player_lines[{i}] must be a dict")
        for key in PLAYER_LINE_KEYS:
            if key not in row:
                raise ValueError(f"player_lines[{i}] missing '{key}'")
    assert_unique_ids((str(row[LINE_PLAYER_ID]) for row in lines), what="player_lines.player_id")
