from __future__ import annotations

"""Engine primitives shared by every simulation step.

- HashRng: reproducible 32-bit hash-mix generator seeded from text
- weighted_pick: the single weighted-random selection used for every participant
- clamp / round_half_up: numeric helpers (rounding matches the persisted results)
"""

import math
from typing import Callable, Optional, Sequence, TypeVar

from .errors import EMPTY_POOL, SimulationError

ENGINE_VERSION = "1.0.0"

T = TypeVar("T")

RandomFn = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Round .5 away from -inf (2.5 -> 3, -2.5 -> -2), never banker's rounding."""
    return int(math.floor(x + 0.5))


def make_seed_text(game_id: str, season: int, day: int, seed_salt: Optional[str] = None) -> str:
    base = f"{game_id}-{season}-{day}"
    if seed_salt:
        return f"{base}-{seed_salt}"
    return base


def _utf16_units(text: str) -> Sequence[int]:
    data = text.encode("utf-16-le")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


class HashRng:
    """Deterministic float stream in [0, 1) keyed by a seed string.

    Same seed text -> same sequence on every platform. The generator keeps its
    own 32-bit accumulator; it never touches the `random` module.
    """

    __slots__ = ("seed_text", "_h", "draws")

    def __init__(self, seed_text: str) -> None:
        h = _FNV_OFFSET_BASIS
        for unit in _utf16_units(seed_text):
            h ^= unit
            h = (h * _FNV_PRIME) & _MASK32
        self.seed_text = seed_text
        self._h = h
        self.draws = 0

    def __call__(self) -> float:
        h = self._h
        h = (h + (h << 13)) & _MASK32
        h ^= h >> 7
        h = (h + (h << 3)) & _MASK32
        h ^= h >> 17
        h = (h + (h << 5)) & _MASK32
        self._h = h
        self.draws += 1
        return (h % 10000) / 10000

    def random(self) -> float:
        return self()

    def __repr__(self) -> str:
        return f"HashRng(seed_text={self.seed_text!r}, draws={self.draws})"


def create_rng(seed_text: str) -> HashRng:
    return HashRng(seed_text)


def weighted_pick(items: Sequence[T], weight: Callable[[T], float], random: RandomFn) -> T:
    """Pick one item with probability proportional to max(0, weight(item)).

    Linear scan with a running threshold: the first item that drives the
    threshold to <= 0 wins. When every weight is zero the first item is
    returned and no random draw is consumed.
    """
    if not items:
        raise SimulationError(EMPTY_POOL, "weighted_pick called with an empty candidate pool")

    weights = [max(0.0, float(weight(item))) for item in items]
    # plain left-to-right accumulation (sum() compensates float error on 3.12+)
    total = 0.0
    for w in weights:
        total += w
    if total <= 0:
        return items[0]

    threshold = random() * total
    for item, w in zip(items, weights):
        threshold -= w
        if threshold <= 0:
            return item
    return items[-1]
