"""Roster/RNG builders shared by the engine tests."""

from pathlib import Path
import sys
from typing import Iterable, List, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from matchengine.builders import create_team_state  # noqa: E402
from matchengine.models import PlayerAttributes, TeamAttributes, TeamState, TeamWithRoster  # noqa: E402

EIGHT_MAN = ("PG", "SG", "SF", "PF", "C", "PG", "SG", "SF")


def make_player(player_id: str, position: str = "SF", team_id=None, **overrides) -> PlayerAttributes:
    fields = dict(
        player_id=player_id,
        first_name=player_id.upper(),
        last_name="Test",
        position=position,
        age=27,
        overall=70,
        potential=70,
        offense=70,
        defense=70,
        playmaking=70,
        rebounding=70,
        stamina=99,
        shot_tendency=50,
        touch_share=20,
        morale=80,
        fatigue=0.0,
        team_id=team_id,
    )
    fields.update(overrides)
    return PlayerAttributes(**fields)


def make_roster(
    team_id: str,
    positions: Sequence[str] = EIGHT_MAN,
    *,
    abbrev: str = "",
    pace: float = 50,
    focus: str = "Balanced",
    **player_overrides,
) -> TeamWithRoster:
    team = TeamAttributes(team_id=team_id, abbrev=abbrev or team_id.upper(), pace=pace, focus=focus)
    players = [
        make_player(f"{team_id}-{i + 1}", pos, team_id=team_id, **player_overrides)
        for i, pos in enumerate(positions)
    ]
    return TeamWithRoster(team=team, players=tuple(players))


def make_state(team_id: str, positions: Sequence[str] = EIGHT_MAN, **kwargs) -> TeamState:
    return create_team_state(make_roster(team_id, positions, **kwargs))


class ConstantRng:
    """Returns the same value on every draw and counts draws."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.draws = 0

    def __call__(self) -> float:
        self.draws += 1
        return self.value


class ScriptedRng:
    """Replays a fixed list of draws; running out is a test bug."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values: List[float] = list(values)
        self.draws = 0

    def __call__(self) -> float:
        if self.draws >= len(self._values):
            raise AssertionError(f"unexpected draw #{self.draws + 1}")
        v = self._values[self.draws]
        self.draws += 1
        return v

    @property
    def remaining(self) -> int:
        return len(self._values) - self.draws
