from __future__ import annotations

"""Input validation run before the first RNG draw.

Fatal problems (no players, same team on both sides, a player id that appears
twice) raise SimulationError. Soft problems (short bench, unknown focus or
position) are collected as warnings; the engine plays on with them.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from config import POSITIONS, STARTERS_PER_TEAM, TEAM_FOCUSES
from schema import normalize_player_id, normalize_team_id

from .errors import DUPLICATE_PLAYER, INVALID_MATCHUP, INVALID_ROSTER, SimulationError
from .models import SimulationInput, TeamWithRoster

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def warn(self, msg: str) -> None:
        self.warnings.append(msg)

    def error(self, msg: str) -> None:
        self.errors.append(msg)


def _check_roster(roster: TeamWithRoster, label: str, report: ValidationReport) -> List[str]:
    try:
        normalize_team_id(roster.team.team_id)
    except ValueError as exc:
        report.error(f"{label}: {exc}")

    if not roster.players:
        report.error(f"{label}: roster is empty")
        return []
    if len(roster.players) < STARTERS_PER_TEAM:
        report.warn(f"{label}: only {len(roster.players)} players, playing short-handed")
    if roster.team.focus not in TEAM_FOCUSES:
        report.warn(f"{label}: unknown focus {roster.team.focus!r}, treated as balanced")

    pids: List[str] = []
    for p in roster.players:
        try:
            pids.append(str(normalize_player_id(p.player_id)))
        except ValueError as exc:
            report.error(f"{label}: {exc}")
            continue
        if p.position not in POSITIONS:
            report.warn(f"{label}: player {p.player_id} has non-canonical position {p.position!r}")
    return pids


def validate_simulation_input(sim_input: SimulationInput) -> ValidationReport:
    """Fail fast on rosters the engine cannot play. Returns the (warning-only) report."""
    report = ValidationReport()
    home_pids = _check_roster(sim_input.home, "home", report)
    away_pids = _check_roster(sim_input.away, "away", report)

    if report.errors:
        raise SimulationError(INVALID_ROSTER, "; ".join(report.errors), {"errors": list(report.errors)})

    home_id = sim_input.home.team.team_id
    away_id = sim_input.away.team.team_id
    if home_id == away_id:
        raise SimulationError(INVALID_MATCHUP, f"home_team_id == away_team_id ({home_id})")

    for label, pids in (("home", home_pids), ("away", away_pids)):
        if len(set(pids)) != len(pids):
            dupes = sorted({pid for pid in pids if pids.count(pid) > 1})
            raise SimulationError(DUPLICATE_PLAYER, f"duplicate player_id within {label} team: {dupes!r}", {"player_ids": dupes})
    overlap = sorted(set(home_pids) & set(away_pids))
    if overlap:
        raise SimulationError(DUPLICATE_PLAYER, f"player_id appears on both teams: {overlap!r}", {"player_ids": overlap})

    for w in report.warnings:
        logger.warning("[SIM_INPUT] game=%s %s", sim_input.game_id, w)
    return report
