from __future__ import annotations

"""Auto-substitution (tired on-court players swapped for fresh bench players)."""

import logging
from typing import List, Optional

from .game_config import DEFAULT_GAME_CONFIG, GameConfig
from .models import LivePlayer, TeamState
from .replay import PlayLog, substitution_line

logger = logging.getLogger(__name__)


def is_sub_tick(tick: int, interval: int) -> bool:
    return tick > 0 and tick % interval == 0


def _best_by_overall(players: List[LivePlayer]) -> Optional[LivePlayer]:
    ranked = sorted(players, key=lambda p: p.attrs.overall, reverse=True)
    return ranked[0] if ranked else None


def _pick_replacement(team: TeamState, tired: LivePlayer) -> Optional[LivePlayer]:
    same_position = [p for p in team.bench if p.position == tired.position]
    return _best_by_overall(same_position) or _best_by_overall(team.bench)


def run_auto_subs(team: TeamState, play_log: PlayLog, cfg: GameConfig = DEFAULT_GAME_CONFIG) -> int:
    """Swap every on-court player above the fatigue threshold. Returns swap count."""
    swaps = 0
    for tired in list(team.on_court):
        if tired.fatigue <= cfg.sub_fatigue_threshold:
            continue

        fresh = _pick_replacement(team, tired)
        if fresh is None:
            continue

        team.bench = [p for p in team.bench if p.player_id != fresh.player_id]
        team.bench.append(tired)
        team.on_court = [fresh if p.player_id == tired.player_id else p for p in team.on_court]
        swaps += 1

        play_log.emit(substitution_line(team.abbrev, fresh, tired))
        logger.debug(
            "[SUB] team=%s in=%s out=%s fatigue=%.1f",
            team.team_id,
            fresh.player_id,
            tired.player_id,
            tired.fatigue,
        )
    return swaps
