import pytest

from models import LeagueBreakdown, LegacyBreakdown, LegacyPointsSystem, Round, resolve_points_system
from scoring.points import calculate_league_points, calculate_legacy_points, score_round

TABLE_SYSTEM = {
    "mode": "league",
    "placementPoints": {"1": 10, "2": 6, "3": 4},
    "participation": {"enabled": True, "points": 1},
}

BONUS_SYSTEM = {
    "mode": "league",
    "placementPoints": {"1": 3, "2": 2},
    "bonuses": {
        "enabled": True,
        "birdie": {"enabled": True, "points": 1},
        "eagle": {"enabled": True, "points": 2},
        "holeInOne": {"enabled": False, "points": 5},
    },
}


# ================================================================
# League mode
# ================================================================

def test_placement_from_table():
    result = calculate_league_points(1, {}, True, TABLE_SYSTEM)
    assert result.placement_points == 10
    assert result.participation_points == 1
    assert result.total_points == 11


def test_rank_past_table_gets_participation_only():
    result = calculate_league_points(4, {}, True, TABLE_SYSTEM)
    assert result.placement_points == 0
    assert result.participation_points == 1
    assert result.total_points == 1


def test_no_participation_when_not_played():
    result = calculate_league_points(None, {}, False, TABLE_SYSTEM)
    assert result.total_points == 0


@pytest.mark.parametrize("rank", [None, 0, -2, "abc", float("nan"), True])
def test_invalid_rank_gets_no_placement(rank):
    result = calculate_league_points(rank, {}, True, TABLE_SYSTEM)
    assert result.placement_points == 0


def test_bonus_flags_count_once():
    result = calculate_league_points(2, {"birdie": True, "eagle": True, "hio": True}, True, BONUS_SYSTEM)
    # hole-in-one rule is disabled
    assert result.bonus_points == 3
    assert result.placement_points == 2
    assert result.total_points == 5


def test_bonuses_ignored_when_disabled_globally():
    system = {**BONUS_SYSTEM, "bonuses": {**BONUS_SYSTEM["bonuses"], "enabled": False}}
    result = calculate_league_points(1, {"birdie": True}, True, system)
    assert result.bonus_points == 0


def test_default_league_table():
    assert calculate_league_points(1, points_system={"mode": "league"}).total_points == 3
    assert calculate_league_points(2, points_system={"mode": "league"}).total_points == 2
    assert calculate_league_points(3, points_system={"mode": "league"}).total_points == 0


# ================================================================
# Legacy mode
# ================================================================

def test_legacy_major_multiplier():
    # base 10 + 3 birdies x 2, doubled on a major day -> 32
    r = Round(birdies=3, is_major=True)
    total, breakdown = calculate_legacy_points(r, LegacyPointsSystem())
    assert total == 32
    assert breakdown.pre_multiplier == 16
    assert breakdown.multiplier == 2.0
    assert breakdown.extras == 6


def test_legacy_non_major_ignores_multiplier():
    r = Round(birdies=1, eagles=1, hole_in_ones=1)
    total, _ = calculate_legacy_points(r, LegacyPointsSystem())
    assert total == 10 + 2 + 5 + 20


def test_legacy_rounds_half_to_even():
    system = LegacyPointsSystem(birdie_points=0.25)
    assert calculate_legacy_points(Round(birdies=2), system)[0] == 10    # 10.5


def test_legacy_major_with_blank_multiplier_doubles():
    system = resolve_points_system({"mode": "legacy", "majorMultiplier": None})
    total, breakdown = calculate_legacy_points(Round(birdies=3, is_major=True), system)
    assert total == 32                 # (10 + 3*2) * 2
    assert breakdown.multiplier == 2.0
    assert calculate_legacy_points(Round(birdies=6), system)[0] == 12    # 11.5


# ================================================================
# Dispatch
# ================================================================

def test_score_round_league_mode():
    r = Round(id="r1", gross_score=70, birdies=2)
    total, breakdown = score_round(r, 1, BONUS_SYSTEM)
    assert isinstance(breakdown, LeagueBreakdown)
    assert total == 4
    assert breakdown.rank == 1
    assert breakdown.bonus_points == 1


def test_score_round_legacy_mode_records_rank():
    r = Round(id="r1", gross_score=70)
    total, breakdown = score_round(r, 2, None)
    assert isinstance(breakdown, LegacyBreakdown)
    assert total == 10
    assert breakdown.rank == 2
