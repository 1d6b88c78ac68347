from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from matchengine.models import TeamAttributes, TeamWithRoster  # noqa: E402
from matchengine.quick_sim import focus_bonus, simulate_quick_game, team_rating  # noqa: E402

from factories import ScriptedRng, make_player, make_roster  # noqa: E402


def test_team_rating_uses_top_five() -> None:
    roster = TeamWithRoster(
        team=TeamAttributes(team_id="t", abbrev="T", pace=50),
        players=[make_player(f"p{i}", overall=o) for i, o in enumerate([60, 90, 80, 70, 85, 75, 65])],
    )
    assert team_rating(roster) == pytest.approx((90 + 85 + 80 + 75 + 70) / 5)


def test_team_rating_default_for_empty_roster() -> None:
    assert team_rating(make_roster("t", ())) == 78.0


def test_focus_bonus() -> None:
    assert focus_bonus("3PT") == 2
    assert focus_bonus("Inside") == 1
    assert focus_bonus("Balanced") == 0


def test_even_matchup_scores() -> None:
    result = simulate_quick_game("q1", make_roster("h"), make_roster("a"), "salt", rng=ScriptedRng([0.5, 0.5]))
    assert (result.home_score, result.away_score) == (104, 101)
    assert result.home_won


@pytest.mark.parametrize("tiebreak,expected_away", [(0.3, 105), (0.7, 103)])
def test_tie_broken_by_one_more_draw(tiebreak, expected_away) -> None:
    rng = ScriptedRng([0.5, 0.65, tiebreak])
    result = simulate_quick_game("q2", make_roster("h"), make_roster("a"), "salt", rng=rng)
    assert result.home_score == 104
    assert result.away_score == expected_away
    assert rng.remaining == 0


def test_scores_are_clamped() -> None:
    strong = make_roster("h", overall=99, focus="3PT")
    weak = make_roster("a", overall=60)
    result = simulate_quick_game("q3", strong, weak, "salt", rng=ScriptedRng([0.99, 0.0]))
    assert result.home_score == 146
    assert result.away_score == 76


def test_same_salt_same_result() -> None:
    home, away = make_roster("h"), make_roster("a", pace=70)
    a = simulate_quick_game("q4", home, away, "day-3")
    b = simulate_quick_game("q4", home, away, "day-3")
    assert a == b
    assert a.home_score != a.away_score
    results = {simulate_quick_game("q4", home, away, f"s{i}") for i in range(10)}
    assert len(results) > 1
