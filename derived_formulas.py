"""derived_formulas.py

Engine ratings derived from a plain roster row (name / position / age / ovr).

- Input: a pandas Series (a row from the roster dataframe) or any mapping
- Output: dict[str, int] with the rating fields PlayerAttributes expects
- Deterministic: per-player noise comes from a 32-bit LCG seeded by "{abbrev}-{name}"
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np
import pandas as pd

from config import DEFAULT_MORALE, FALLBACK_POSITION, POSITION_PROFILES, POSITIONS

# 로스터 컬럼명 (엑셀 원본 / 정규화된 이름 둘 다 허용)
COL = {
    "Name": ("name", "Name", "PLAYER"),
    "Pos": ("pos", "POS", "position", "Position"),
    "Age": ("age", "Age"),
    "Ovr": ("ovr", "OVR", "overall", "Overall"),
    "Abbrev": ("abbrev", "Team", "team_abbrev"),
}

_MASK32 = 0xFFFFFFFF


def _get(row, key: str, default: Any = None) -> Any:
    for c in COL.get(key, ()):
        if c in row and pd.notna(row[c]):
            return row[c]
    return default


def _get_num(row, key: str, default: float) -> float:
    v = _get(row, key, default)
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def _clip(x: float, lo: float, hi: float) -> int:
    return int(np.clip(x, lo, hi))


def text_hash(text: str) -> int:
    """31-multiplier string hash over UTF-16 code units, wrapped to 32 bits."""
    data = text.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        value = (value * 31 + (data[i] | (data[i + 1] << 8))) & _MASK32
    return value


def lcg(seed: int) -> Callable[[], float]:
    """Numerical Recipes LCG; each call returns state / 0xFFFFFFFF in [0, 1]."""
    state = seed & _MASK32

    def _next() -> float:
        nonlocal state
        state = (1664525 * state + 1013904223) & _MASK32
        return state / 0xFFFFFFFF

    return _next


def _randint(random: Callable[[], float], n: int) -> int:
    return int(math.floor(random() * n))


def parse_name(name: str) -> Tuple[str, str]:
    parts = str(name).split()
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], " ".join(parts[1:])


def normalize_position(pos: Any) -> Optional[str]:
    p = str(pos or "").strip().upper()
    return p if p in POSITIONS else None


def default_morale(name: str) -> int:
    return DEFAULT_MORALE - 5 + _randint(lcg(text_hash(str(name))), 16)


def derive_ratings(row, depth_index: int, *, abbrev: Optional[str] = None) -> Dict[str, int]:
    """Engine ratings for one roster row.

    depth_index is the player's rank on the team by ovr (0 = best); the top
    five get a role boost on shot tendency and touch share.
    Draw order is fixed (height, potential, offense, defense, playmaking,
    rebounding, stamina, tendency) so a player keeps the same ratings across runs.
    Height is drawn but not returned; the engine has no height rating.
    """
    name = str(_get(row, "Name", ""))
    team = str(abbrev if abbrev is not None else _get(row, "Abbrev", ""))
    position = normalize_position(_get(row, "Pos")) or FALLBACK_POSITION
    age = int(_get_num(row, "Age", 27))
    ovr = _get_num(row, "Ovr", 70)

    random = lcg(text_hash(f"{team}-{name}"))
    profile = POSITION_PROFILES[position]

    random()  # height: drawn and discarded

    overall = _clip(ovr, 60, 99)
    age_curve = 6 if age <= 24 else (-6 if age >= 33 else 2)
    potential = _clip(overall + age_curve + _randint(random, 5), 58, 99)

    offense = _clip(overall + profile["offense"] + _randint(random, 5) - 2, 50, 99)
    defense = _clip(overall + profile["defense"] + _randint(random, 5) - 2, 45, 99)
    playmaking = _clip(overall + profile["playmaking"] + _randint(random, 6) - 3, 40, 99)
    rebounding = _clip(overall + profile["rebounding"] + _randint(random, 6) - 3, 40, 99)

    stamina_base = 86 - max(0, age - 30) * 2
    stamina = _clip(stamina_base + _randint(random, 9) - 4, 60, 98)

    role_boost = _clip(4 - depth_index, 0, 4) * 3
    shot_tendency = _clip(48 + profile["tendency"] + role_boost + _randint(random, 12), 18, 95)
    touch_share = _clip(8 + role_boost * 2 + math.floor((overall - 70) / 2), 5, 38)

    return {
        "overall": overall,
        "potential": potential,
        "offense": offense,
        "defense": defense,
        "playmaking": playmaking,
        "rebounding": rebounding,
        "stamina": stamina,
        "shot_tendency": shot_tendency,
        "touch_share": touch_share,
    }


def bench_filler_row(abbrev: str, team_label: str, index: int) -> Dict[str, Any]:
    """Synthetic depth player used to pad a short roster (position cycles PG..C)."""
    random = lcg(text_hash(f"{abbrev}-bench-{index}"))
    age = 22 + _randint(random, 9)
    ovr = 71 + _randint(random, 8)
    return {
        "name": f"{team_label} Bench {index + 1}".strip(),
        "pos": POSITIONS[index % len(POSITIONS)],
        "age": age,
        "ovr": ovr,
    }
