from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from matchengine.models import SimulationInput  # noqa: E402
from matchengine.sim_game import simulate_game  # noqa: E402
from sim.league_sim import simulate_day, simulate_slate  # noqa: E402

from factories import make_roster  # noqa: E402


def _slate(n=4):
    games = []
    for i in range(n):
        home = make_roster(f"h{i}", pace=45 + i * 5)
        away = make_roster(f"a{i}", focus="Inside")
        games.append(SimulationInput(game_id=f"slate-{i}", season=2026, day=10, home=home, away=away))
    return games


def test_sequential_slate_matches_single_games() -> None:
    games = _slate()
    results = simulate_slate(games)
    assert [r.game_id for r in results] == [g.game_id for g in games]
    assert results == [simulate_game(g) for g in games]


def test_parallel_slate_matches_sequential() -> None:
    games = _slate()
    assert simulate_slate(games, max_workers=2) == simulate_slate(games)


def test_empty_slate() -> None:
    assert simulate_slate([]) == []


def test_slate_config_override() -> None:
    results = simulate_slate(_slate(2), config={"max_overtime_periods": 0})
    assert all(r.overtime_periods == 0 for r in results)


def test_simulate_day_splits_full_and_quick() -> None:
    games = _slate(3)
    full, quick = simulate_day(games[:1], games[1:], seed_salt="day-10")
    assert [r.game_id for r in full] == ["slate-0"]
    assert [q.game_id for q in quick] == ["slate-1", "slate-2"]
    again = simulate_day(games[:1], games[1:], seed_salt="day-10")
    assert again == (full, quick)


@pytest.mark.parametrize("workers", [0, 1])
def test_non_positive_workers_run_inline(workers) -> None:
    assert len(simulate_slate(_slate(2), max_workers=workers)) == 2
