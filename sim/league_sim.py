from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple

from matchengine.game_config import GameConfig
from matchengine.models import SimulationInput, SimulationResult
from matchengine.quick_sim import QuickResult, simulate_quick_game
from matchengine.sim_game import ConfigLike, resolve_game_config, simulate_game

logger = logging.getLogger(__name__)


def _run_one(sim_input: SimulationInput, cfg: GameConfig) -> SimulationResult:
    # module-level so ProcessPoolExecutor can pickle it
    return simulate_game(sim_input, config=cfg)


def simulate_slate(
    games: Sequence[SimulationInput],
    *,
    max_workers: int = 1,
    config: ConfigLike = None,
) -> List[SimulationResult]:
    """Simulate independent games; results come back in input order.

    Every game owns its RNG and state, so running them in worker processes
    gives exactly the results a sequential loop would.
    """
    cfg = resolve_game_config(config)
    games = list(games)
    if not games:
        return []

    start = time.perf_counter()
    if max_workers <= 1 or len(games) == 1:
        results = [_run_one(g, cfg) for g in games]
    else:
        slots: List[Optional[SimulationResult]] = [None] * len(games)
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(_run_one, g, cfg): i for i, g in enumerate(games)}
            for future in as_completed(futures):
                i = futures[future]
                try:
                    slots[i] = future.result()
                except Exception:
                    logger.exception("[SLATE_GAME_FAILED] game_id=%s", games[i].game_id)
                    raise
        results = [r for r in slots if r is not None]

    elapsed = time.perf_counter() - start
    logger.info(
        "[SLATE_DONE] games=%d workers=%d overtime_games=%d elapsed=%.2fs",
        len(results),
        max_workers,
        sum(1 for r in results if r.overtime_periods > 0),
        elapsed,
    )
    return results


def simulate_day(
    featured: Sequence[SimulationInput],
    others: Sequence[SimulationInput],
    *,
    seed_salt: str,
    max_workers: int = 1,
    config: ConfigLike = None,
) -> Tuple[List[SimulationResult], List[QuickResult]]:
    """Full simulation for featured games, score-only for the rest of the day."""
    full = simulate_slate(featured, max_workers=max_workers, config=config)
    quick = [simulate_quick_game(g.game_id, g.home, g.away, seed_salt) for g in others]
    logger.info("[SIM_DAY] full=%d quick=%d", len(full), len(quick))
    return full, quick
