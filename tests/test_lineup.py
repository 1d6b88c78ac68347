import unittest
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from matchengine.builders import create_team_state, hydrate_players, pick_starting_lineup  # noqa: E402
from matchengine.models import TeamAttributes, TeamWithRoster  # noqa: E402

from factories import make_player  # noqa: E402


def _ids(players):
    return [p.player_id for p in players]


class TestStartingLineup(unittest.TestCase):
    def test_best_player_per_position_in_canonical_order(self):
        roster = [
            make_player("c1", "C", overall=75),
            make_player("pg1", "PG", overall=80),
            make_player("pg2", "PG", overall=85),
            make_player("sf1", "SF", overall=70),
            make_player("pf1", "PF", overall=72),
            make_player("sg1", "SG", overall=68),
            make_player("sg2", "SG", overall=90),
        ]
        starters, bench = pick_starting_lineup(hydrate_players(roster))
        self.assertEqual(_ids(starters), ["pg2", "sg2", "sf1", "pf1", "c1"])
        self.assertEqual(_ids(bench), ["pg1", "sg1"])

    def test_missing_position_filled_by_best_remaining(self):
        roster = [
            make_player("pg1", "PG", overall=80),
            make_player("pg2", "PG", overall=78),
            make_player("sg1", "SG", overall=75),
            make_player("sf1", "SF", overall=74),
            make_player("pf1", "PF", overall=73),
            make_player("sg2", "SG", overall=79),
        ]
        starters, bench = pick_starting_lineup(hydrate_players(roster))
        # no C on the roster: best unassigned player takes the fifth slot
        self.assertEqual(_ids(starters), ["pg1", "sg2", "sf1", "pf1", "pg2"])
        self.assertEqual(_ids(bench), ["sg1"])

    def test_equal_overall_keeps_roster_order(self):
        roster = [make_player(f"p{i}", "SF", overall=70) for i in range(7)]
        starters, bench = pick_starting_lineup(hydrate_players(roster))
        self.assertEqual(_ids(starters), ["p0", "p1", "p2", "p3", "p4"])
        self.assertEqual(_ids(bench), ["p5", "p6"])

    def test_short_roster_is_not_padded(self):
        roster = [make_player("a", "PG"), make_player("b", "C"), make_player("c", "SF")]
        starters, bench = pick_starting_lineup(hydrate_players(roster))
        self.assertEqual(len(starters), 3)
        self.assertEqual(bench, [])

    def test_on_court_and_bench_partition_roster(self):
        roster = TeamWithRoster(
            team=TeamAttributes(team_id="t1", abbrev="T1", pace=50),
            players=[make_player(f"p{i}", pos) for i, pos in enumerate(["PG", "SG", "SF", "PF", "C", "PG", "C", "SF", "SG"])],
        )
        state = create_team_state(roster)
        on_ids = set(_ids(state.on_court))
        bench_ids = set(_ids(state.bench))
        self.assertEqual(len(state.on_court), 5)
        self.assertFalse(on_ids & bench_ids)
        self.assertEqual(on_ids | bench_ids, {p.player_id for p in roster.players})


class TestHydration(unittest.TestCase):
    def test_persisted_fatigue_is_clamped_and_stats_zeroed(self):
        players = hydrate_players([
            make_player("a", fatigue=120.0),
            make_player("b", fatigue=-3.0),
            make_player("c", fatigue=41.5),
        ])
        self.assertEqual([p.fatigue for p in players], [99.0, 0.0, 41.5])
        for p in players:
            self.assertEqual(p.minutes, 0.0)
            self.assertEqual(p.stat_line.points, 0)

    def test_input_snapshot_is_not_mutated(self):
        roster = TeamWithRoster(
            team=TeamAttributes(team_id="t1", abbrev="T1", pace=50),
            players=[make_player("a", fatigue=10.0)],
        )
        state = create_team_state(roster)
        state.on_court[0].add_fatigue(30.0)
        self.assertEqual(roster.players[0].fatigue, 10.0)
        self.assertIsInstance(roster.players, tuple)


if __name__ == "__main__":
    unittest.main()
