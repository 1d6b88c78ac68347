from __future__ import annotations

"""Fatigue model (effectiveness multiplier, per-tick accrual and bench recovery)."""

from .core import clamp
from .game_config import DEFAULT_GAME_CONFIG, GameConfig
from .models import LivePlayer, TeamState


def fatigue_multiplier(player: LivePlayer) -> float:
    # fresh until fatigue passes stamina, then 0.90 -> 0.80 over the next 30 points
    stamina = player.attrs.stamina
    if player.fatigue <= stamina:
        return 1.0
    over = min(30.0, player.fatigue - stamina)
    return clamp(1.0 - (0.1 + (over / 30.0) * 0.1), 0.8, 0.95)


def apply_tick_fatigue_and_minutes(
    team: TeamState,
    minutes_per_tick: float,
    cfg: GameConfig = DEFAULT_GAME_CONFIG,
) -> None:
    for p in team.on_court:
        p.add_minutes(minutes_per_tick)
        gain = minutes_per_tick * (cfg.on_court_fatigue_base + p.attrs.touch_share / cfg.touch_share_fatigue_divisor)
        p.add_fatigue(gain)

    for p in team.bench:
        p.add_fatigue(-minutes_per_tick * cfg.bench_recovery_rate)
