from __future__ import annotations

from typing import Iterator, List, Tuple

from config import PLAY_LOG_LIMIT

from .core import round_half_up
from .models import LivePlayer


# ---------------------------------------------------------------------------
# Play-by-play log
# - One incident => exactly one line (call emit once)
# - Lines stay in generation order; the result keeps only the first PLAY_LOG_LIMIT
# ---------------------------------------------------------------------------

class PlayLog:
    def __init__(self) -> None:
        self._lines: List[str] = []

    def emit(self, line: str) -> None:
        self._lines.append(str(line))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def lines(self) -> List[str]:
        return list(self._lines)

    def capped(self, limit: int = PLAY_LOG_LIMIT) -> Tuple[str, ...]:
        return tuple(self._lines[:limit])


def turnover_line(handler: LivePlayer) -> str:
    return f"{handler.label} turns it over."


def make_line(shooter: LivePlayer, is_three: bool) -> str:
    return f"{shooter.label} makes {'a 3PT shot' if is_three else 'a 2PT shot'}."


def putback_line(rebounder: LivePlayer) -> str:
    return f"{rebounder.label} gets the board and scores on a putback."


def offensive_rebound_line(rebounder: LivePlayer) -> str:
    return f"{rebounder.label} grabs the offensive rebound."


def defensive_rebound_line(rebounder: LivePlayer) -> str:
    return f"{rebounder.label} secures the defensive rebound."


def overtime_line(period: int) -> str:
    return f"Overtime {period} begins."


def substitution_line(abbrev: str, fresh: LivePlayer, tired: LivePlayer) -> str:
    return f"{abbrev} sub: {fresh.label} replaces {tired.label} (fatigue {round_half_up(tired.fatigue)})"
