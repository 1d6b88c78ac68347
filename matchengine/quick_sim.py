from __future__ import annotations

"""Score-only simulation for games nobody watches.

No possessions, no box score: two clamped score draws from team strength,
pace and focus. Used for the rest of the league's slate on a sim day.
"""

from dataclasses import dataclass
from typing import Optional

from config import DEFAULT_TEAM_RATING, FOCUS_INSIDE, FOCUS_THREE, STARTERS_PER_TEAM

from .core import RandomFn, clamp, create_rng, round_half_up
from .models import TeamWithRoster

HOME_COURT_BONUS = 2

_FOCUS_BONUS = {FOCUS_THREE: 2, FOCUS_INSIDE: 1}


@dataclass(frozen=True)
class QuickResult:
    game_id: str
    home_score: int
    away_score: int

    @property
    def home_won(self) -> bool:
        return self.home_score > self.away_score


def team_rating(roster: TeamWithRoster) -> float:
    """Mean overall of the five best players (league default when nobody is rostered)."""
    top = sorted((p.overall for p in roster.players), reverse=True)[:STARTERS_PER_TEAM]
    if not top:
        return DEFAULT_TEAM_RATING
    return sum(top) / len(top)


def focus_bonus(focus: str) -> int:
    return _FOCUS_BONUS.get(focus, 0)


def quick_seed_text(game_id: str, seed_salt: str) -> str:
    return f"{game_id}-{seed_salt}"


def simulate_quick_game(
    game_id: str,
    home: TeamWithRoster,
    away: TeamWithRoster,
    seed_salt: str,
    rng: Optional[RandomFn] = None,
) -> QuickResult:
    random = rng if rng is not None else create_rng(quick_seed_text(game_id, seed_salt))

    pace_band = ((home.team.pace + away.team.pace) / 2 - 50) * 0.7
    rating_diff = (team_rating(home) - team_rating(away)) * 0.9

    home_score = round_half_up(
        clamp(
            102 + pace_band + rating_diff + focus_bonus(home.team.focus) + (random() - 0.5) * 20 + HOME_COURT_BONUS,
            78,
            146,
        )
    )
    away_score = round_half_up(
        clamp(
            101 + pace_band - rating_diff + focus_bonus(away.team.focus) + (random() - 0.5) * 20,
            76,
            144,
        )
    )

    # no ties in a quick result
    if away_score == home_score:
        away_score += 1 if random() < 0.5 else -1

    return QuickResult(game_id=game_id, home_score=home_score, away_score=away_score)
