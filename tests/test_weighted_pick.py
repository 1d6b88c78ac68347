from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from matchengine.core import clamp, round_half_up, weighted_pick  # noqa: E402
from matchengine.errors import EMPTY_POOL, SimulationError  # noqa: E402

from factories import ConstantRng, ScriptedRng  # noqa: E402


ITEMS = ["a", "b", "c"]
WEIGHTS = {"a": 1.0, "b": 2.0, "c": 1.0}


def _pick(draw: float) -> str:
    return weighted_pick(ITEMS, WEIGHTS.get, ScriptedRng([draw]))


def test_threshold_scan_boundaries() -> None:
    # total 4: threshold = draw * 4
    assert _pick(0.0) == "a"
    assert _pick(0.25) == "a"  # 1 - 1 == 0 -> first to reach <= 0
    assert _pick(0.26) == "b"
    assert _pick(0.75) == "b"
    assert _pick(0.76) == "c"
    assert _pick(0.9999) == "c"


def test_zero_total_returns_first_without_draw() -> None:
    rng = ScriptedRng([])
    assert weighted_pick(ITEMS, lambda _: 0.0, rng) == "a"
    assert rng.draws == 0


def test_negative_weights_count_as_zero() -> None:
    weights = {"a": -5.0, "b": 1.0, "c": -1.0}
    assert weighted_pick(ITEMS, weights.get, ConstantRng(0.0)) == "a"
    assert weighted_pick(ITEMS, weights.get, ConstantRng(0.5)) == "b"
    assert weighted_pick(ITEMS, weights.get, ConstantRng(0.99)) == "b"


def test_single_item_consumes_one_draw() -> None:
    rng = ConstantRng(0.3)
    assert weighted_pick(["only"], lambda _: 3.0, rng) == "only"
    assert rng.draws == 1


def test_empty_pool_raises() -> None:
    with pytest.raises(SimulationError) as excinfo:
        weighted_pick([], lambda _: 1.0, ConstantRng())
    assert excinfo.value.code == EMPTY_POOL
    assert str(excinfo.value).startswith("EMPTY_POOL:")


def test_round_half_up_matches_persisted_rounding() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(105.5) == 106
    assert round_half_up(-2.5) == -2
    assert round_half_up(4.49) == 4


def test_clamp() -> None:
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(1.5, 0, 3) == 1.5
