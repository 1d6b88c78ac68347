from typing import Dict, Tuple

# 포지션 (선발 라인업은 이 순서대로 채운다)
POSITIONS: Tuple[str, ...] = ("PG", "SG", "SF", "PF", "C")
GUARD_POSITIONS: Tuple[str, ...] = ("PG", "SG")
BIG_POSITIONS: Tuple[str, ...] = ("PF", "C")
FALLBACK_POSITION = "SF"

# 팀 공격 성향
FOCUS_THREE = "3PT"
FOCUS_INSIDE = "Inside"
FOCUS_BALANCED = "Balanced"
TEAM_FOCUSES: Tuple[str, ...] = (FOCUS_THREE, FOCUS_INSIDE, FOCUS_BALANCED)
DEFAULT_FOCUS = FOCUS_BALANCED

# 플레이 로그 상한 (저장/스트리밍 계약값이므로 튜닝 대상 아님)
PLAY_LOG_LIMIT = 220

# 피로도 범위
FATIGUE_MIN = 0.0
FATIGUE_MAX = 99.0

# 로스터 기본값
DEFAULT_PACE = 50
DEFAULT_MORALE = 80
DEFAULT_TEAM_RATING = 78.0
STARTERS_PER_TEAM = 5
MIN_ROSTER_SIZE = 8  # 시드 로스터를 채울 때의 최소 인원

# 포지션별 능력치 보정 (overall 기준 가감)
POSITION_PROFILES: Dict[str, Dict[str, int]] = {
    "PG": {"offense": 2, "defense": -1, "playmaking": 8, "rebounding": -6, "tendency": 7},
    "SG": {"offense": 4, "defense": 0, "playmaking": 2, "rebounding": -4, "tendency": 8},
    "SF": {"offense": 2, "defense": 2, "playmaking": 1, "rebounding": -1, "tendency": 3},
    "PF": {"offense": 0, "defense": 2, "playmaking": -2, "rebounding": 4, "tendency": -2},
    "C": {"offense": 1, "defense": 3, "playmaking": -5, "rebounding": 7, "tendency": -6},
}
