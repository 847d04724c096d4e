from datetime import date, datetime

from models import Round
from scoring.events import event_key, group_by_event, round_event_key, rounds_in_event


def _round(**kwargs):
    base = dict(league_id="L1", date=date(2024, 6, 1), course="Augusta", holes=18, gross_score=80)
    base.update(kwargs)
    return Round(**base)


def test_event_key_format():
    assert event_key("L1", date(2024, 6, 1), "Augusta", 18) == "L1::2024-06-01::augusta::18"


def test_event_key_normalizes_course_and_date():
    a = event_key("L1", "2024-06-01T08:00:00Z", "  Royal Birkdale ", 18)
    b = event_key("L1", datetime(2024, 6, 1, 16, 45), "royal birkdale", "18")
    assert a == b


def test_event_key_sentinels():
    assert event_key(None, None, None) == "no_league::no_date::no_course::18"
    assert event_key("", "", "   ", holes="x") == "no_league::no_date::no_course::18"


def test_nine_and_eighteen_holes_are_different_events():
    assert round_event_key(_round(holes=9)) != round_event_key(_round(holes=18))


def test_rounds_in_event_and_grouping():
    rounds = [
        _round(id="a"),
        _round(id="b", course="augusta "),
        _round(id="c", league_id="L2"),
        _round(id="d", date=date(2024, 6, 2)),
    ]
    members = rounds_in_event(rounds, round_event_key(rounds[0]))
    assert [r.id for r in members] == ["a", "b"]

    groups = group_by_event(rounds)
    assert [[r.id for r in g] for g in groups.values()] == [["a", "b"], ["c"], ["d"]]
