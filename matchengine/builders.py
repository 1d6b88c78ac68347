from __future__ import annotations

"""Roster hydration and starting-lineup selection.

Every simulation run builds its own LivePlayer/TeamState objects from the
caller's frozen snapshot, so the caller's rosters can be reused across runs.
"""

from typing import Iterable, List, Tuple

from config import FATIGUE_MAX, FATIGUE_MIN, POSITIONS, STARTERS_PER_TEAM

from .core import clamp
from .models import LivePlayer, LiveStatLine, PlayerAttributes, TeamState, TeamWithRoster


def hydrate_players(players: Iterable[PlayerAttributes]) -> List[LivePlayer]:
    return [
        LivePlayer(
            attrs=p,
            fatigue=clamp(float(p.fatigue), FATIGUE_MIN, FATIGUE_MAX),
            minutes=0.0,
            stat_line=LiveStatLine(),
        )
        for p in players
    ]


def pick_starting_lineup(players: List[LivePlayer]) -> Tuple[List[LivePlayer], List[LivePlayer]]:
    """Return (starters, bench).

    Best player at each canonical position first, then best remaining players
    regardless of position until five starters are chosen.
    """
    # sorted() is stable: equal overall keeps roster order
    available = sorted(players, key=lambda p: p.attrs.overall, reverse=True)
    starters: List[LivePlayer] = []

    for position in POSITIONS:
        for i, p in enumerate(available):
            if p.position == position:
                starters.append(available.pop(i))
                break

    while len(starters) < STARTERS_PER_TEAM and available:
        starters.append(available.pop(0))

    return starters, available


def create_team_state(roster: TeamWithRoster) -> TeamState:
    live = hydrate_players(roster.players)
    on_court, bench = pick_starting_lineup(live)
    return TeamState(team=roster.team, on_court=on_court, bench=bench, score=0)
