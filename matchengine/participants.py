from __future__ import annotations

"""Participant selection for one possession.

Every random choice goes through core.weighted_pick so tie-break semantics are
identical for ball handlers, shooters, defenders and rebounders.
"""

from typing import List

from .core import RandomFn, weighted_pick
from .errors import EMPTY_POOL, SimulationError
from .models import LivePlayer, TeamState
from .sim_fatigue import fatigue_multiplier


def team_defense_pressure(team: TeamState) -> float:
    """Average on-court defense rating / 100 (0.5 for an empty floor)."""
    if not team.on_court:
        return 0.5
    return sum(p.attrs.defense for p in team.on_court) / len(team.on_court) / 100


def team_rebound_index(team: TeamState) -> float:
    if not team.on_court:
        raise SimulationError(EMPTY_POOL, f"{team.team_id}: no on-court players for rebound index")
    return sum(p.attrs.rebounding for p in team.on_court) / len(team.on_court)


def choose_ball_handler(offense: TeamState, random: RandomFn) -> LivePlayer:
    return weighted_pick(
        offense.on_court,
        lambda p: p.attrs.touch_share * fatigue_multiplier(p) * (0.85 + p.attrs.morale / 200),
        random,
    )


def choose_pass_target(offense: TeamState, ball_handler: LivePlayer, random: RandomFn) -> LivePlayer:
    targets: List[LivePlayer] = [p for p in offense.on_court if p.player_id != ball_handler.player_id]
    return weighted_pick(targets, lambda p: p.attrs.offense * fatigue_multiplier(p), random)


def choose_defender(shooter: LivePlayer, defense: TeamState, random: RandomFn) -> LivePlayer:
    # matchup first; a draw is consumed only when nobody shares the position
    for p in defense.on_court:
        if p.position == shooter.position:
            return p
    return weighted_pick(defense.on_court, lambda p: p.attrs.defense, random)


def choose_rebounder(team: TeamState, random: RandomFn) -> LivePlayer:
    return weighted_pick(team.on_court, lambda p: p.attrs.rebounding, random)
