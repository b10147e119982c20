import pytest

from classroom.core.tally import Tally, VoteBoard


@pytest.fixture
def tally():
    return Tally(["agree", "disagree"])


def test_percentages_from_counts(tally):
    for _ in range(3):
        tally.increment("agree")
    tally.increment("disagree")

    assert tally.total() == 4
    assert tally.percentage("agree") == 75
    assert tally.percentage("disagree") == 25
    assert tally.as_dict() == {"agree": 3, "disagree": 1}


def test_empty_tally_reports_zero_percent(tally):
    assert tally.total() == 0
    assert tally.percentage("agree") == 0
    assert tally.percentage("disagree") == 0
    assert tally.leader() is None


def test_decrement_never_goes_below_zero(tally):
    assert tally.decrement("agree") == 0
    tally.increment("agree")
    tally.decrement("agree")
    tally.decrement("agree")
    assert tally.count("agree") == 0


def test_half_percent_rounds_up():
    tally = Tally(["a", "b"])
    tally.increment("a")
    for _ in range(7):
        tally.increment("b")

    # 12.5% and 87.5%
    assert tally.percentage("a") == 13
    assert tally.percentage("b") == 88


def test_unknown_option_raises_key_error(tally):
    with pytest.raises(KeyError):
        tally.increment("maybe")
    with pytest.raises(KeyError):
        tally.percentage("maybe")


def test_reset_clears_every_count(tally):
    tally.increment("agree")
    tally.increment("disagree")
    tally.reset()
    assert tally.total() == 0
    assert tally.options == ["agree", "disagree"]


def test_leader_is_none_on_a_tie(tally):
    tally.increment("agree")
    tally.increment("disagree")
    assert tally.leader() is None

    tally.increment("disagree")
    assert tally.leader() == "disagree"


def test_vote_board_keeps_sets_apart():
    board = VoteBoard([["Tea", "Coffee"], ["Cats", "Dogs", "Fish"]])

    board.vote(0, "Coffee")
    board.vote(1, "Fish")
    board.vote(1, "Fish")

    assert len(board) == 2
    assert board.winner(0) == "Coffee"
    assert board.winner(1) == "Fish"
    assert board.total_votes() == 3

    board.reset()
    assert board.total_votes() == 0
    assert board.winner(1) is None
