from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Tuple

import pandas as pd

from config import MIN_ROSTER_SIZE
from sim.result_deltas import box_score_frame
from sim.roster_adapter import build_rosters_from_frames

from .models import SimulationResult, TeamWithRoster
from .sim_game import simulate


# -------------------------
# Pretty printing (player boxscore table)
# -------------------------

def print_player_boxscore_table(roster: TeamWithRoster, result: SimulationResult) -> None:
    box = box_score_frame(result)
    box = box[box["team_id"] == roster.team.team_id]
    names = {p.player_id: p.label for p in roster.players}

    headers = ["PLAYER", "MIN", "PTS", "REB", "AST", "TOV", "FAT"]
    widths = {"PLAYER": 22, "MIN": 4, "PTS": 4, "REB": 4, "AST": 4, "TOV": 4, "FAT": 4}

    rows = [
        {
            "PLAYER": names.get(r.player_id, r.player_id),
            "MIN": r.minutes,
            "PTS": r.points,
            "REB": r.rebounds,
            "AST": r.assists,
            "TOV": r.turnovers,
            "FAT": r.fatigue,
        }
        for r in box.itertuples(index=False)
    ]
    rows.append({
        "PLAYER": "TOTAL",
        "MIN": int(box["minutes"].sum()),
        "PTS": int(box["points"].sum()),
        "REB": int(box["rebounds"].sum()),
        "AST": int(box["assists"].sum()),
        "TOV": int(box["turnovers"].sum()),
        "FAT": "",
    })

    def fmt_row(r: dict) -> str:
        return " ".join(str(r.get(h, "")).ljust(widths[h])[:widths[h]] for h in headers)

    sep = "-" * (sum(widths.values()) + (len(headers) - 1))
    print(f"\n[{roster.team.abbrev}] Player Boxscore")
    print(fmt_row({h: h for h in headers}))
    print(sep)
    for i, r in enumerate(rows):
        if i == len(rows) - 1:
            print(sep)
        print(fmt_row(r))


# -------------------------
# Demo (sample rosters)
# -------------------------

def sample_frames() -> Tuple[pd.DataFrame, pd.DataFrame]:
    teams = pd.DataFrame([
        {"team_id": "t-lal", "abbrev": "LAL", "city": "Los Angeles", "name": "Lakers", "pace": 54, "focus": "Balanced"},
        {"team_id": "t-bos", "abbrev": "BOS", "city": "Boston", "name": "Celtics", "pace": 49, "focus": "3PT"},
    ])
    rows: List[dict] = []
    for team_id, prefix, ovrs in (
        ("t-lal", "lal", (90, 84, 80, 79, 77)),
        ("t-bos", "bos", (89, 86, 82, 78, 76)),
    ):
        for i, (pos, ovr) in enumerate(zip(("PG", "SG", "SF", "PF", "C"), ovrs)):
            rows.append({
                "player_id": f"{prefix}-{i + 1}",
                "team_id": team_id,
                "name": f"{prefix.upper()} Starter {i + 1}",
                "pos": pos,
                "age": 24 + i * 2,
                "ovr": ovr,
            })
    return teams, pd.DataFrame(rows)


def demo(game_id: str = "demo-game", season: int = 2026, day: int = 1, seed_salt: str = "", log_lines: int = 20) -> SimulationResult:
    teams, players = sample_frames()
    rosters = build_rosters_from_frames(teams, players, pad_to=MIN_ROSTER_SIZE)
    home, away = rosters["t-lal"], rosters["t-bos"]

    result = simulate(game_id, season, day, home, away, seed_salt or None)

    ot = f" ({result.overtime_periods}OT)" if result.overtime_periods else ""
    print(f"\n=== {game_id} (season {season}, day {day}) ===")
    print(f"Final Score: {home.team.abbrev} {result.home_score} - {away.team.abbrev} {result.away_score}{ot}")
    print_player_boxscore_table(home, result)
    print_player_boxscore_table(away, result)

    print(f"\nPlay log (first {log_lines} of {len(result.play_log)}):")
    for line in result.play_log[:log_lines]:
        print(f"  {line}")
    return result


# -------------------------
# CLI entrypoint
# -------------------------

def main(argv=None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    ap = argparse.ArgumentParser(description="match engine demo")
    ap.add_argument("--game-id", default="demo-game", help="Game id (part of the seed).")
    ap.add_argument("--season", type=int, default=2026, help="Season (part of the seed).")
    ap.add_argument("--day", type=int, default=1, help="Day (part of the seed).")
    ap.add_argument("--seed-salt", default="", help="Extra seed text; same salt -> same game.")
    ap.add_argument("--log-lines", type=int, default=20, help="Play-log lines to print.")
    ap.add_argument("--verbose", action="store_true", help="Show engine debug logs.")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    demo(args.game_id, args.season, args.day, args.seed_salt, args.log_lines)

if __name__ == "__main__":
    main()
