from datetime import date

from models import LegacyBreakdown, Player, Round
from scoring.standings import build_standings, player_stats

LEAGUE_SYSTEM = {"mode": "league", "placementPoints": {"1": 10, "2": 6, "3": 4}}
PLAYERS = [Player(id="alice", name="Alice"), Player(id="bob", name="Bob"), Player(id="cara", name="cara")]


def _round(round_id, player_id, gross, day=1, **kwargs):
    base = dict(
        id=round_id, player_id=player_id, gross_score=gross,
        league_id="L1", date=date(2024, 6, day), course="Augusta",
    )
    base.update(kwargs)
    return Round(**base)


def test_league_standings_rederive_stale_points():
    rounds = [
        _round("a1", "alice", 72, points=999),   # stale stored value
        _round("b1", "bob", 70),
        _round("a2", "alice", 71, day=8),
        _round("b2", "bob", 75, day=8),
    ]
    table = build_standings(PLAYERS, rounds, LEAGUE_SYSTEM)

    assert [row.player_id for row in table] == ["alice", "bob", "cara"]
    alice, bob, cara = table
    assert alice.points == 16
    assert bob.points == 16
    assert alice.rounds == 2
    assert cara.points == 0
    assert cara.rounds == 0


def test_standings_tiebreak_rounds_then_name():
    rounds = [
        _round("a1", "alice", 72),
        _round("c1", "cara", 72),
        _round("b1", "bob", 80, day=8),
    ]
    table = build_standings(PLAYERS, rounds, LEAGUE_SYSTEM)
    # alice and cara both 10 points from a shared first place, bob 10 from his own event
    assert [row.name for row in table] == ["Alice", "Bob", "cara"]


def test_standings_counts_majors_and_last_five():
    rounds = [_round(f"r{d}", "alice", 80, day=d, is_major=(d == 3), birdies=1) for d in range(1, 8)]
    table = build_standings([Player(id="alice", name="Alice")], rounds, LEAGUE_SYSTEM)

    row = table[0]
    assert row.rounds == 7
    assert row.majors == 1
    assert row.birdies == 7
    assert len(row.last5) == 5
    assert [r.date.day for r in row.last5] == [7, 6, 5, 4, 3]
    assert row.last5[-1].is_major is True


def test_legacy_standings_trust_stored_points():
    stored = _round("a1", "alice", 80, points=25, points_breakdown=LegacyBreakdown(base=25))
    missing = _round("a2", "alice", 80, day=8, birdies=1)
    table = build_standings([Player(id="alice", name="Alice")], [stored, missing], None)
    # 25 stored + (10 base + 2 birdie) computed
    assert table[0].points == 37


def test_rounds_of_unknown_players_are_ignored():
    rounds = [_round("z", "zed", 60)]
    table = build_standings(PLAYERS, rounds, LEAGUE_SYSTEM)
    assert all(row.points == 0 for row in table)


def test_player_stats():
    rounds = [_round(f"r{d}", "alice", 80, day=d) for d in range(1, 13)] + [_round("b", "bob", 70)]
    stats = player_stats("alice", PLAYERS, rounds, LEAGUE_SYSTEM)

    assert stats["row"].player_id == "alice"
    assert stats["row"].rounds == 12
    assert len(stats["recent_rounds"]) == 10
    assert stats["recent_rounds"][0].date == date(2024, 6, 12)


def test_player_stats_unknown_player():
    stats = player_stats("nobody", PLAYERS, [], LEAGUE_SYSTEM)
    assert stats["row"] is None
    assert stats["recent_rounds"] == []
