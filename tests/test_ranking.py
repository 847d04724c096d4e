import math

from models import Round
from scoring.ranking import competition_ranks, rank_for_score


def _event(*scores):
    return [Round(id=f"r{i}", gross_score=s) for i, s in enumerate(scores)]


def test_ties_share_rank_and_skip():
    # 72, 75, 75, 80 -> 1, 2, 2, 4
    assert competition_ranks(_event(72, 75, 75, 80)) == [1, 2, 2, 4]


def test_rank_independent_of_order():
    assert competition_ranks(_event(80, 75, 72, 75)) == [4, 2, 1, 2]


def test_large_tie_group():
    ranks = competition_ranks(_event(70, 70, 70, 71))
    assert ranks == [1, 1, 1, 4]


def test_target_not_in_event():
    assert rank_for_score(_event(70, 75), 73) == 2
    assert rank_for_score(_event(70, 75), 90) == 3


def test_unscored_rounds_are_ignored():
    rounds = _event(72, 75) + [Round(id="blank")]
    assert rank_for_score(rounds, 75) == 2
    assert competition_ranks(rounds)[-1] is None


def test_invalid_target_or_empty_event():
    assert rank_for_score(_event(72), None) is None
    assert rank_for_score(_event(72), "abc") is None
    assert rank_for_score(_event(72), math.nan) is None
    assert rank_for_score(_event(72), True) is None
    assert rank_for_score([], 72) is None
    assert rank_for_score([Round(id="blank")], 72) is None
