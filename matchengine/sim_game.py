from __future__ import annotations

"""Game orchestration (validation, regulation tick loop, overtime, result).

One tick = one possession for the side with the ball (home on even ticks),
then fatigue/minutes for both teams, then substitutions on the sub cadence.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from config import PLAY_LOG_LIMIT
from schema import SimulationResultDict

from .builders import create_team_state
from .core import ENGINE_VERSION, RandomFn, create_rng, make_seed_text, round_half_up
from .errors import INVALID_CONFIG, SimulationError
from .game_config import DEFAULT_GAME_CONFIG, GameConfig, build_game_config
from .models import PlayerLine, SimulationInput, SimulationResult, TeamState, TeamWithRoster
from .replay import PlayLog, overtime_line
from .sim_fatigue import apply_tick_fatigue_and_minutes
from .sim_possession import simulate_possession
from .sim_rotation import is_sub_tick, run_auto_subs
from .validation import validate_simulation_input

logger = logging.getLogger(__name__)

ConfigLike = Union[GameConfig, Mapping, None]


def resolve_game_config(config: ConfigLike) -> GameConfig:
    if config is None:
        return DEFAULT_GAME_CONFIG
    if isinstance(config, GameConfig):
        return config
    return build_game_config(config)


def regulation_tick_count(home: TeamState, away: TeamState, random: RandomFn, cfg: GameConfig) -> int:
    """Possessions per side from combined pace plus one jitter draw; ticks = 2x."""
    pace_factor = (home.team.pace + away.team.pace) / 200
    per_side = round_half_up(cfg.base_possessions + pace_factor * cfg.pace_possession_span + random() * cfg.possession_jitter)
    if per_side < 1:
        raise SimulationError(
            INVALID_CONFIG,
            f"regulation has no possessions (base={cfg.base_possessions}, pace_factor={pace_factor:.2f})",
        )
    return per_side * 2


def _play_ticks(
    home: TeamState,
    away: TeamState,
    *,
    ticks: int,
    minutes_per_tick: float,
    sub_interval: int,
    random: RandomFn,
    play_log: PlayLog,
    cfg: GameConfig,
) -> None:
    for tick in range(ticks):
        offense, defense = (home, away) if tick % 2 == 0 else (away, home)

        simulate_possession(offense, defense, random, play_log)

        apply_tick_fatigue_and_minutes(home, minutes_per_tick, cfg)
        apply_tick_fatigue_and_minutes(away, minutes_per_tick, cfg)

        if is_sub_tick(tick, sub_interval):
            run_auto_subs(home, play_log, cfg)
            run_auto_subs(away, play_log, cfg)


def _line_for(player, fallback_team_id: str) -> PlayerLine:
    return PlayerLine(
        player_id=player.player_id,
        team_id=player.attrs.team_id or fallback_team_id,
        points=player.stat_line.points,
        rebounds=player.stat_line.rebounds,
        assists=player.stat_line.assists,
        turnovers=player.stat_line.turnovers,
        minutes=round_half_up(player.minutes),
        fatigue=round_half_up(player.fatigue),
    )


def build_result(
    home: TeamState,
    away: TeamState,
    play_log: PlayLog,
    *,
    game_id: str = "",
    overtime_periods: int = 0,
    regulation_ticks: int = 0,
) -> SimulationResult:
    # ties go to home (only reachable after the overtime limit)
    if home.score >= away.score:
        winner, loser = home.team_id, away.team_id
    else:
        winner, loser = away.team_id, home.team_id

    lines = [_line_for(p, home.team_id) for p in home.roster()]
    lines += [_line_for(p, away.team_id) for p in away.roster()]

    return SimulationResult(
        home_score=home.score,
        away_score=away.score,
        winner_team_id=winner,
        loser_team_id=loser,
        play_log=play_log.capped(PLAY_LOG_LIMIT),
        player_lines=tuple(lines),
        game_id=game_id,
        home_team_id=home.team_id,
        away_team_id=away.team_id,
        overtime_periods=overtime_periods,
        regulation_ticks=regulation_ticks,
        engine_version=ENGINE_VERSION,
    )


def simulate_game(
    sim_input: SimulationInput,
    *,
    config: ConfigLike = None,
    rng: Optional[RandomFn] = None,
) -> SimulationResult:
    """Simulate one full game (regulation plus overtime while tied).

    The result depends only on the rosters and the seed text built from
    (game_id, season, day, seed_salt). Pass `rng` to drive the game from a
    different float source (any zero-arg callable returning [0, 1)).
    """
    cfg = resolve_game_config(config)
    validate_simulation_input(sim_input)

    seed_text = make_seed_text(sim_input.game_id, sim_input.season, sim_input.day, sim_input.seed_salt)
    random = rng if rng is not None else create_rng(seed_text)
    play_log = PlayLog()

    home = create_team_state(sim_input.home)
    away = create_team_state(sim_input.away)

    regulation_ticks = regulation_tick_count(home, away, random, cfg)
    logger.debug(
        "[SIM_START] game=%s seed=%r home=%s away=%s ticks=%d",
        sim_input.game_id,
        seed_text,
        home.team_id,
        away.team_id,
        regulation_ticks,
    )

    _play_ticks(
        home,
        away,
        ticks=regulation_ticks,
        minutes_per_tick=cfg.regulation_minutes / regulation_ticks,
        sub_interval=cfg.regulation_sub_interval,
        random=random,
        play_log=play_log,
        cfg=cfg,
    )

    overtime_periods = 0
    while home.score == away.score and overtime_periods < cfg.max_overtime_periods:
        overtime_periods += 1
        play_log.emit(overtime_line(overtime_periods))
        logger.debug("[OVERTIME] game=%s period=%d score=%d", sim_input.game_id, overtime_periods, home.score)
        _play_ticks(
            home,
            away,
            ticks=cfg.overtime_ticks,
            minutes_per_tick=cfg.overtime_minutes / cfg.overtime_ticks,
            sub_interval=cfg.overtime_sub_interval,
            random=random,
            play_log=play_log,
            cfg=cfg,
        )

    if home.score == away.score:
        logger.warning(
            "[SIM_TIE] game=%s still tied %d-%d after %d overtime periods; home recorded as winner",
            sim_input.game_id,
            home.score,
            away.score,
            overtime_periods,
        )

    result = build_result(
        home,
        away,
        play_log,
        game_id=sim_input.game_id,
        overtime_periods=overtime_periods,
        regulation_ticks=regulation_ticks,
    )
    logger.debug(
        "[SIM_END] game=%s %s %d - %d %s ot=%d log_lines=%d",
        sim_input.game_id,
        home.team_id,
        result.home_score,
        result.away_score,
        away.team_id,
        overtime_periods,
        len(play_log),
    )
    return result


def simulate(
    game_id: str,
    season: int,
    day: int,
    home: TeamWithRoster,
    away: TeamWithRoster,
    seed_salt: Optional[str] = None,
    *,
    config: ConfigLike = None,
    rng: Optional[RandomFn] = None,
) -> SimulationResult:
    sim_input = SimulationInput(
        game_id=game_id,
        season=season,
        day=day,
        home=home,
        away=away,
        seed_salt=seed_salt,
    )
    return simulate_game(sim_input, config=config, rng=rng)


def simulate_to_dict(*args: Any, **kwargs: Any) -> SimulationResultDict:
    """simulate() returning the persisted dict form (schema.SimulationResultDict)."""
    return simulate(*args, **kwargs).to_dict()
