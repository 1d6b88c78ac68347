from __future__ import annotations

import copy
from dataclasses import dataclass, fields
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Optional

from .errors import INVALID_CONFIG, SimulationError


DEFAULT_RULES: Mapping[str, Any] = MappingProxyType(
    {
        "regulation_minutes": 48.0,
        "base_possessions": 92.0,
        "pace_possession_span": 22.0,
        "possession_jitter": 5.0,
        "max_overtime_periods": 4,
        "overtime_ticks": 20,
        "overtime_minutes": 5.0,
        "regulation_sub_interval": 9,
        "overtime_sub_interval": 5,
        "sub_fatigue_threshold": 80.0,
        "on_court_fatigue_base": 1.75,
        "touch_share_fatigue_divisor": 95.0,
        "bench_recovery_rate": 1.9,
    }
)

_POSITIVE_INT_KEYS = ("overtime_ticks", "regulation_sub_interval", "overtime_sub_interval")
_POSITIVE_FLOAT_KEYS = ("regulation_minutes", "overtime_minutes", "touch_share_fatigue_divisor", "base_possessions")
_NON_NEGATIVE_FLOAT_KEYS = ("pace_possession_span", "possession_jitter")


def _freeze_mapping(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze_mapping(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze_mapping(v) for v in value)
    return value


@dataclass(frozen=True)
class GameConfig:
    regulation_minutes: float
    base_possessions: float
    pace_possession_span: float
    possession_jitter: float
    max_overtime_periods: int
    overtime_ticks: int
    overtime_minutes: float
    regulation_sub_interval: int
    overtime_sub_interval: int
    sub_fatigue_threshold: float
    on_court_fatigue_base: float
    touch_share_fatigue_divisor: float
    bench_recovery_rate: float

    def to_rules(self) -> Mapping[str, Any]:
        return _freeze_mapping({f.name: getattr(self, f.name) for f in fields(self)})


def build_game_config(overrides: Optional[Mapping[str, Any]] = None) -> GameConfig:
    if overrides is not None and not isinstance(overrides, Mapping):
        raise SimulationError(
            INVALID_CONFIG,
            f"build_game_config expected Mapping, got {type(overrides).__name__}",
        )
    rules = dict(DEFAULT_RULES)
    unknown = sorted(set(overrides or {}) - set(rules))
    if unknown:
        raise SimulationError(INVALID_CONFIG, f"unknown game config keys: {unknown!r}", {"keys": unknown})
    rules.update(copy.deepcopy(dict(overrides or {})))

    for key in _POSITIVE_INT_KEYS:
        v = rules[key]
        if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
            raise SimulationError(INVALID_CONFIG, f"'{key}' must be a positive int, got {v!r}")
    for key in _POSITIVE_FLOAT_KEYS:
        try:
            v = float(rules[key])
        except (TypeError, ValueError) as exc:
            raise SimulationError(INVALID_CONFIG, f"'{key}' must be a number, got {rules[key]!r}") from exc
        if v <= 0:
            raise SimulationError(INVALID_CONFIG, f"'{key}' must be > 0, got {v!r}")
    for key in _NON_NEGATIVE_FLOAT_KEYS:
        try:
            v = float(rules[key])
        except (TypeError, ValueError) as exc:
            raise SimulationError(INVALID_CONFIG, f"'{key}' must be a number, got {rules[key]!r}") from exc
        if v < 0:
            raise SimulationError(INVALID_CONFIG, f"'{key}' must be >= 0, got {v!r}")
    max_ot = rules["max_overtime_periods"]
    if not isinstance(max_ot, int) or isinstance(max_ot, bool) or max_ot < 0:
        raise SimulationError(INVALID_CONFIG, f"'max_overtime_periods' must be an int >= 0, got {max_ot!r}")

    frozen = _freeze_mapping(rules)
    return GameConfig(
        regulation_minutes=float(frozen["regulation_minutes"]),
        base_possessions=float(frozen["base_possessions"]),
        pace_possession_span=float(frozen["pace_possession_span"]),
        possession_jitter=float(frozen["possession_jitter"]),
        max_overtime_periods=int(frozen["max_overtime_periods"]),
        overtime_ticks=int(frozen["overtime_ticks"]),
        overtime_minutes=float(frozen["overtime_minutes"]),
        regulation_sub_interval=int(frozen["regulation_sub_interval"]),
        overtime_sub_interval=int(frozen["overtime_sub_interval"]),
        sub_fatigue_threshold=float(frozen["sub_fatigue_threshold"]),
        on_court_fatigue_base=float(frozen["on_court_fatigue_base"]),
        touch_share_fatigue_divisor=float(frozen["touch_share_fatigue_divisor"]),
        bench_recovery_rate=float(frozen["bench_recovery_rate"]),
    )


DEFAULT_GAME_CONFIG = build_game_config()
