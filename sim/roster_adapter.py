from __future__ import annotations

"""DataFrame -> engine snapshot adapter.

Callers keep teams and players in pandas frames (one row per team / player).
This module turns them into the frozen TeamWithRoster objects simulate()
takes. Rating columns that are missing are derived from (name, pos, age, ovr)
via derived_formulas.derive_ratings, so a bare roster sheet is enough.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from config import (
    DEFAULT_FOCUS,
    DEFAULT_PACE,
    FALLBACK_POSITION,
    TEAM_FOCUSES,
)
from derived_formulas import bench_filler_row, default_morale, derive_ratings, normalize_position, parse_name
from matchengine.models import PlayerAttributes, TeamAttributes, TeamWithRoster
from schema import normalize_player_id, normalize_team_id


logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


def _warn_limited(code: str, msg: str, *, limit: int = 3) -> None:
    """Log warning, but cap repeats per code."""
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


RATING_COLUMNS = (
    "overall",
    "potential",
    "offense",
    "defense",
    "playmaking",
    "rebounding",
    "stamina",
    "shot_tendency",
    "touch_share",
)


def _cell(row, *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in row and pd.notna(row[k]):
            return row[k]
    return default


def _team_attributes(team_row) -> TeamAttributes:
    team_id = str(normalize_team_id(_cell(team_row, "team_id", "id")))
    abbrev = str(_cell(team_row, "abbrev", default=team_id)).upper()

    focus = str(_cell(team_row, "focus", default=DEFAULT_FOCUS))
    if focus not in TEAM_FOCUSES:
        _warn_limited("ROSTER_BAD_FOCUS", f"team_id={team_id!r} focus={focus!r} -> {DEFAULT_FOCUS}")
        focus = DEFAULT_FOCUS

    return TeamAttributes(
        team_id=team_id,
        abbrev=abbrev,
        pace=float(_cell(team_row, "pace", default=DEFAULT_PACE)),
        focus=focus,
        city=str(_cell(team_row, "city", default="")),
        name=str(_cell(team_row, "name", "team", default="")),
    )


def _player_attributes(row, team: TeamAttributes, depth_index: int) -> PlayerAttributes:
    player_id = str(normalize_player_id(_cell(row, "player_id", "id")))

    position = normalize_position(_cell(row, "position", "pos"))
    if position is None:
        _warn_limited(
            "ROSTER_BAD_POSITION",
            f"player_id={player_id!r} position={_cell(row, 'position', 'pos')!r} -> {FALLBACK_POSITION}",
        )
        position = FALLBACK_POSITION

    first_name = _cell(row, "first_name")
    last_name = _cell(row, "last_name")
    full_name = _cell(row, "name", default="")
    if first_name is None and last_name is None:
        first_name, last_name = parse_name(full_name)
    first_name = str(first_name or "")
    last_name = str(last_name or "")
    if not full_name:
        full_name = f"{first_name} {last_name}".strip()

    # derived draws are consumed only when a rating column is absent
    ratings: Dict[str, Any] = {}
    if any(_cell(row, col) is None for col in RATING_COLUMNS):
        ratings = derive_ratings(
            {"name": full_name, "pos": position, "age": _cell(row, "age", default=27), "ovr": _cell(row, "ovr", "overall", default=70)},
            depth_index,
            abbrev=team.abbrev,
        )

    def rating(col: str) -> int:
        v = _cell(row, col)
        return int(v) if v is not None else int(ratings[col])

    morale = _cell(row, "morale")
    return PlayerAttributes(
        player_id=player_id,
        first_name=first_name,
        last_name=last_name,
        position=position,
        age=int(_cell(row, "age", default=27)),
        overall=rating("overall"),
        potential=rating("potential"),
        offense=rating("offense"),
        defense=rating("defense"),
        playmaking=rating("playmaking"),
        rebounding=rating("rebounding"),
        stamina=rating("stamina"),
        shot_tendency=rating("shot_tendency"),
        touch_share=rating("touch_share"),
        morale=int(morale) if morale is not None else default_morale(full_name),
        fatigue=float(_cell(row, "fatigue", default=0.0)),
        team_id=team.team_id,
    )


def _sort_by_strength(frame: pd.DataFrame) -> pd.DataFrame:
    for col in ("overall", "ovr"):
        if col in frame.columns:
            return frame.sort_values(col, ascending=False, kind="mergesort")
    return frame


def build_team_with_roster(
    team_row,
    players_df: pd.DataFrame,
    *,
    pad_to: int = 0,
) -> TeamWithRoster:
    """Snapshot one team.

    players_df may hold the whole league; rows are filtered on team_id.
    With pad_to > 0 a short roster is filled with synthetic bench players.
    """
    team = _team_attributes(team_row)

    if "team_id" in players_df.columns:
        frame = players_df[players_df["team_id"].astype(str).str.strip() == team.team_id]
    else:
        frame = players_df
    frame = _sort_by_strength(frame)

    players: List[PlayerAttributes] = [
        _player_attributes(row, team, depth_index)
        for depth_index, (_, row) in enumerate(frame.iterrows())
    ]

    team_label = f"{team.city} {team.name}".strip() or team.abbrev
    while len(players) < pad_to:
        index = len(players)
        filler = bench_filler_row(team.abbrev, team_label, index)
        filler["player_id"] = f"{team.team_id}-bench-{index + 1}"
        players.append(_player_attributes(filler, team, index))

    if not players:
        _warn_limited("ROSTER_EMPTY", f"team_id={team.team_id!r} has no players")

    logger.debug("[ROSTER_BUILT] team=%s players=%d", team.team_id, len(players))
    return TeamWithRoster(team=team, players=tuple(players))


def build_rosters_from_frames(
    teams_df: pd.DataFrame,
    players_df: pd.DataFrame,
    *,
    pad_to: int = 0,
    team_ids: Optional[List[str]] = None,
) -> Dict[str, TeamWithRoster]:
    """team_id -> TeamWithRoster for every row of teams_df (or only team_ids)."""
    wanted = {str(t) for t in team_ids} if team_ids is not None else None
    out: Dict[str, TeamWithRoster] = {}
    for _, team_row in teams_df.iterrows():
        if wanted is not None and str(_cell(team_row, "team_id", "id", default="")).strip() not in wanted:
            continue
        roster = build_team_with_roster(team_row, players_df, pad_to=pad_to)
        out[roster.team.team_id] = roster
    return out
