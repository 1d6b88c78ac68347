from __future__ import annotations

"""Possession simulation (ball handler, pass, turnover, shot, rebound).

RNG draws happen in a fixed order; changing it changes every game for a seed:
  handler pick -> pass draw -> [pass target pick] -> [defender pick]
  -> turnover draw -> shot-type draw -> make draw
  -> make:  [assist draw]
  -> miss:  offensive-rebound draw -> rebounder pick -> putback draw | outlet draw
"""

from config import BIG_POSITIONS, FOCUS_BALANCED, FOCUS_INSIDE, FOCUS_THREE, GUARD_POSITIONS

from .core import RandomFn, clamp
from .models import LivePlayer, TeamState
from .participants import (
    choose_ball_handler,
    choose_defender,
    choose_pass_target,
    choose_rebounder,
    team_defense_pressure,
    team_rebound_index,
)
from .replay import (
    PlayLog,
    defensive_rebound_line,
    make_line,
    offensive_rebound_line,
    putback_line,
    turnover_line,
)
from .sim_fatigue import fatigue_multiplier

# Possession outcome tags
OUTCOME_TOV = "TOV"
OUTCOME_MAKE_2 = "MAKE_2"
OUTCOME_MAKE_3 = "MAKE_3"
OUTCOME_PUTBACK = "PUTBACK"
OUTCOME_ORB = "ORB"
OUTCOME_DRB = "DRB"

PASS_SHOT_BONUS = 0.05
ASSIST_CREDIT_PROB = 0.78
PUTBACK_PROB = 0.45
OUTLET_ASSIST_BASE = 0.28
OUTLET_ASSIST_PLAYMAKING = 70

_THREE_RATE_BY_FOCUS = {FOCUS_THREE: 0.46, FOCUS_INSIDE: 0.26}
_THREE_RATE_DEFAULT = 0.35


def pass_probability(ball_handler: LivePlayer, offense: TeamState) -> float:
    balanced = 0.05 if offense.team.focus == FOCUS_BALANCED else 0.0
    return clamp(0.16 + ball_handler.attrs.playmaking / 180 + balanced, 0.18, 0.72)


def turnover_probability(ball_handler: LivePlayer, defense_pressure: float) -> float:
    return clamp(
        0.06 + (100 - ball_handler.attrs.playmaking) / 280 + defense_pressure * 0.18,
        0.05,
        0.26,
    )


def three_point_rate(shooter: LivePlayer, offense: TeamState) -> float:
    rate = _THREE_RATE_BY_FOCUS.get(offense.team.focus, _THREE_RATE_DEFAULT)
    if shooter.position in GUARD_POSITIONS:
        rate += 0.05
    if shooter.position in BIG_POSITIONS:
        rate -= 0.07
    return clamp(rate + (shooter.attrs.shot_tendency - 50) / 240, 0.14, 0.58)


def make_probability(
    shooter: LivePlayer,
    defender: LivePlayer,
    defense_pressure: float,
    is_three: bool,
    shot_bonus: float,
) -> float:
    attack_index = shooter.attrs.offense * 0.65 + shooter.attrs.overall * 0.35
    defense_index = defender.attrs.defense * 0.68 + defense_pressure * 34

    p = 0.35 if is_three else 0.53
    p += (attack_index - defense_index) / 210
    p += shot_bonus
    p *= fatigue_multiplier(shooter)
    return clamp(p, 0.18, 0.74)


def offensive_rebound_probability(offense: TeamState, defense: TeamState) -> float:
    return clamp(0.22 + (team_rebound_index(offense) - team_rebound_index(defense)) / 220, 0.12, 0.36)


def simulate_possession(
    offense: TeamState,
    defense: TeamState,
    random: RandomFn,
    play_log: PlayLog,
) -> str:
    """Resolve one possession in place (scores, stat lines, play log). Returns the outcome tag."""
    offense_pressure = team_defense_pressure(offense)
    defense_pressure = team_defense_pressure(defense)

    ball_handler = choose_ball_handler(offense, random)
    shooter = ball_handler
    passer = None
    shot_bonus = 0.0

    should_pass = random() < pass_probability(ball_handler, offense)
    if should_pass and len(offense.on_court) > 1:
        shooter = choose_pass_target(offense, ball_handler, random)
        passer = ball_handler
        shot_bonus += PASS_SHOT_BONUS

    defender = choose_defender(shooter, defense, random)

    if random() < turnover_probability(ball_handler, defense_pressure):
        ball_handler.stat_line.turnovers += 1
        play_log.emit(turnover_line(ball_handler))
        return OUTCOME_TOV

    is_three = random() < three_point_rate(shooter, offense)
    points = 3 if is_three else 2

    if random() < make_probability(shooter, defender, defense_pressure, is_three, shot_bonus):
        offense.score += points
        shooter.stat_line.points += points
        if passer is not None and passer.player_id != shooter.player_id and random() < ASSIST_CREDIT_PROB:
            passer.stat_line.assists += 1
        play_log.emit(make_line(shooter, is_three))
        return OUTCOME_MAKE_3 if is_three else OUTCOME_MAKE_2

    if random() < offensive_rebound_probability(offense, defense):
        rebounder = choose_rebounder(offense, random)
        rebounder.stat_line.rebounds += 1
        if random() < PUTBACK_PROB:
            offense.score += 2
            rebounder.stat_line.points += 2
            play_log.emit(putback_line(rebounder))
            return OUTCOME_PUTBACK
        play_log.emit(offensive_rebound_line(rebounder))
        return OUTCOME_ORB

    rebounder = choose_rebounder(defense, random)
    rebounder.stat_line.rebounds += 1
    # outlet assist: credited without a made basket in this possession,
    # gated on the shooting team's defensive pressure
    if random() < OUTLET_ASSIST_BASE + offense_pressure * 0.04:
        if rebounder.attrs.playmaking > OUTLET_ASSIST_PLAYMAKING:
            rebounder.stat_line.assists += 1
    play_log.emit(defensive_rebound_line(rebounder))
    return OUTCOME_DRB
