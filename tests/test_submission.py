from datetime import date, datetime, timezone

from models import Award, League, LeagueBreakdown, Round
from scoring.awards import AWARDS_BY_KEY
from scoring.submission import (
    ordinal,
    preview_round,
    resolve_player_id,
    submission_message,
    submit_round,
)

LEAGUE_SYSTEM = {"mode": "league", "placementPoints": {"1": 10, "2": 6, "3": 4}}
NOW = datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)
DAY = date(2024, 6, 1)


def _round(round_id, player_id, gross, **kwargs):
    base = dict(
        id=round_id, player_id=player_id, player_name=player_id.title(),
        gross_score=gross, league_id="L1", date=DAY, course="Augusta",
    )
    base.update(kwargs)
    return Round(**base)


# ================================================================
# Helpers
# ================================================================

def test_ordinal():
    assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 101, 111)] == [
        "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "101st", "111th",
    ]
    assert ordinal(None) is None


def test_resolve_player_id():
    league = League(id="L1", host_id="host")
    assert resolve_player_id(league, "host", "alice") == "alice"
    assert resolve_player_id(league, "host") == "host"
    assert resolve_player_id(league, "bob", "alice") == "bob"
    assert resolve_player_id(None, "bob", "alice") == "bob"


# ================================================================
# Preview
# ================================================================

def test_preview_ranks_draft_against_event():
    stored = [_round("a", "alice", 72), _round("b", "bob", 75)]
    draft = Round(player_id="cara", gross_score=74, par=72, league_id="L1", date=DAY, course="augusta")

    preview = preview_round(stored, draft, LEAGUE_SYSTEM)
    assert preview.rank == 2
    assert preview.points == 6
    assert preview.to_par_label == "+2"
    assert isinstance(preview.breakdown, LeagueBreakdown)


def test_preview_incomplete_draft_does_not_raise():
    stored = [_round("a", "alice", 72)]
    preview = preview_round(stored, Round(player_id="cara", league_id="L1"), LEAGUE_SYSTEM)
    assert preview.rank is None
    assert preview.points == 0
    assert preview.to_par_label == "—"


def test_preview_does_not_modify_stored_rounds():
    stored = [_round("a", "alice", 72, rank=1, points=10)]
    draft = Round(player_id="cara", gross_score=70, league_id="L1", date=DAY, course="Augusta")
    preview_round(stored, draft, LEAGUE_SYSTEM)
    assert stored[0].rank == 1
    assert stored[0].points == 10


# ================================================================
# Submit
# ================================================================

def test_submit_rescores_event_and_assigns_identity():
    stored = [_round("a", "alice", 72, rank=1, points=10)]
    new = Round(player_id="bob", player_name="Bob", gross_score=70, league_id="L1", date=DAY, course="Augusta")

    result = submit_round(stored, new, LEAGUE_SYSTEM, earned_at=NOW)

    assert result.round.id.startswith("round_")
    assert result.round.created_at == NOW
    assert result.round.submitted_by == "bob"
    assert result.round.rank == 1
    assert result.round.points == 10
    assert [r.id for r in result.rounds] == ["a", result.round.id]
    assert result.rounds[0].rank == 2
    assert result.rounds[0].points == 6
    assert {r.id for r in result.changed_rounds} == {"a", result.round.id}


def test_submit_grants_first_round_once():
    first = submit_round([], _round("a", "alice", 95), LEAGUE_SYSTEM, earned_at=NOW)
    assert [a.key for a in first.granted] == ["badge_first_round"]
    assert first.granted[0].round_id == "a"
    assert first.granted[0].earned_at == NOW

    second = submit_round(
        first.rounds,
        _round("b", "alice", 96, date=date(2024, 6, 8)),
        LEAGUE_SYSTEM,
        existing_awards=first.player_awards,
        earned_at=NOW,
    )
    assert second.granted == []
    assert [a.key for a in second.player_awards] == ["badge_first_round"]


def test_submit_only_reports_new_awards():
    held = [AWARDS_BY_KEY["badge_break_90"].model_copy(update={"earned_at": NOW, "round_id": "old"})]
    prior = [_round("old", "alice", 85, date=date(2024, 5, 1))]
    result = submit_round(prior, _round("n", "alice", 78), LEAGUE_SYSTEM, existing_awards=held, earned_at=NOW)

    assert "badge_break_90" in result.awards.keys()
    assert [a.key for a in result.granted] == ["trophy_break_80"]
    kept = next(a for a in result.player_awards if a.key == "badge_break_90")
    assert kept.round_id == "old"


def test_submission_message():
    result = submit_round([], _round("a", "sam", 80), LEAGUE_SYSTEM, earned_at=NOW)
    assert submission_message(result) == "1st place - +10 points added for Sam."

    unranked = submit_round([], Round(id="u", player_id="sam", player_name="Sam"), LEAGUE_SYSTEM, earned_at=NOW)
    assert submission_message(unranked) == "+0 points added for Sam."


def test_submit_keeps_award_objects_typed():
    result = submit_round([], _round("a", "alice", 70, par=72), LEAGUE_SYSTEM, earned_at=NOW)
    assert all(isinstance(a, Award) for a in result.player_awards)
    assert "trophy_par_or_better" in [a.key for a in result.granted]
