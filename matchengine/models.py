from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config import DEFAULT_FOCUS, FATIGUE_MAX, FATIGUE_MIN
from schema import SCHEMA_VERSION, PlayerLineDict, SimulationResultDict

from .core import clamp

# -------------------------
# Input snapshot (immutable for the run)
# -------------------------

@dataclass(frozen=True)
class PlayerAttributes:
    player_id: str
    first_name: str
    last_name: str
    position: str
    age: int
    overall: int
    potential: int
    offense: int
    defense: int
    playmaking: int
    rebounding: int
    stamina: int
    shot_tendency: int
    touch_share: int
    morale: int
    fatigue: float = 0.0  # persisted between games
    team_id: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class TeamAttributes:
    team_id: str
    abbrev: str
    pace: float
    focus: str = DEFAULT_FOCUS
    city: str = ""
    name: str = ""


@dataclass(frozen=True)
class TeamWithRoster:
    team: TeamAttributes
    players: Tuple[PlayerAttributes, ...]

    def __post_init__(self) -> None:
        # accept any sequence from callers but store a tuple
        if not isinstance(self.players, tuple):
            object.__setattr__(self, "players", tuple(self.players))


@dataclass(frozen=True)
class SimulationInput:
    game_id: str
    season: int
    day: int
    home: TeamWithRoster
    away: TeamWithRoster
    seed_salt: Optional[str] = None


# -------------------------
# In-game state (owned by one simulation run)
# -------------------------

@dataclass
class LiveStatLine:
    points: int = 0
    rebounds: int = 0
    assists: int = 0
    turnovers: int = 0


@dataclass
class LivePlayer:
    attrs: PlayerAttributes
    fatigue: float
    minutes: float = 0.0
    stat_line: LiveStatLine = field(default_factory=LiveStatLine)

    @property
    def player_id(self) -> str:
        return self.attrs.player_id

    @property
    def position(self) -> str:
        return self.attrs.position

    @property
    def label(self) -> str:
        return self.attrs.label

    def add_fatigue(self, delta: float) -> None:
        self.fatigue = clamp(self.fatigue + delta, FATIGUE_MIN, FATIGUE_MAX)

    def add_minutes(self, delta: float) -> None:
        if delta > 0:
            self.minutes += delta


@dataclass
class TeamState:
    team: TeamAttributes
    on_court: List[LivePlayer]
    bench: List[LivePlayer]
    score: int = 0

    @property
    def team_id(self) -> str:
        return self.team.team_id

    @property
    def abbrev(self) -> str:
        return self.team.abbrev

    def roster(self) -> List[LivePlayer]:
        return [*self.on_court, *self.bench]


# -------------------------
# Output record
# -------------------------

@dataclass(frozen=True)
class PlayerLine:
    player_id: str
    team_id: str
    points: int
    rebounds: int
    assists: int
    turnovers: int
    minutes: int
    fatigue: int

    def to_dict(self) -> PlayerLineDict:
        return {
            "player_id": self.player_id,
            "team_id": self.team_id,
            "points": self.points,
            "rebounds": self.rebounds,
            "assists": self.assists,
            "turnovers": self.turnovers,
            "minutes": self.minutes,
            "fatigue": self.fatigue,
        }


@dataclass(frozen=True)
class SimulationResult:
    home_score: int
    away_score: int
    winner_team_id: str
    loser_team_id: str
    play_log: Tuple[str, ...]
    player_lines: Tuple[PlayerLine, ...]

    game_id: str = ""
    home_team_id: str = ""
    away_team_id: str = ""
    overtime_periods: int = 0
    regulation_ticks: int = 0
    engine_version: str = ""

    @property
    def is_tie(self) -> bool:
        return self.home_score == self.away_score

    def lines_for_team(self, team_id: str) -> List[PlayerLine]:
        return [line for line in self.player_lines if line.team_id == team_id]

    def to_dict(self) -> SimulationResultDict:
        return {
            "home_score": self.home_score,
            "away_score": self.away_score,
            "winner_team_id": self.winner_team_id,
            "loser_team_id": self.loser_team_id,
            "play_log": list(self.play_log),
            "player_lines": [line.to_dict() for line in self.player_lines],
            "meta": {
                "schema_version": SCHEMA_VERSION,
                "engine_version": self.engine_version,
                "game_id": self.game_id,
                "home_team_id": self.home_team_id,
                "away_team_id": self.away_team_id,
                "overtime_periods": self.overtime_periods,
                "regulation_ticks": self.regulation_ticks,
            },
        }
