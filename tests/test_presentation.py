import pytest

from classroom.core.presentation import AUTO_ADVANCE_DELAY, Presentation
from classroom.core.timer import TimerMode
from classroom.models.session_config import (
    AgreeDisagreeConfig,
    Card,
    ChoiceSet,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    TalkPrompt,
    ThisOrThatConfig,
    TimedTalkConfig,
)
from classroom.models.slide import SlideType


@pytest.fixture
def four_three_two(scheduler):
    config = FourThreeTwoConfig(prompt="Describe your hometown", rounds=[4, 3, 2])
    return Presentation(config, scheduler=scheduler)


@pytest.fixture
def this_or_that(scheduler):
    config = ThisOrThatConfig(
        sets=[
            ChoiceSet(options=["Tea", "Coffee"]),
            ChoiceSet(options=["Cats", "Dogs"]),
            ChoiceSet(options=["Sea", "Mountains"]),
        ],
        timer_enabled=True,
        timer_seconds=5,
    )
    return Presentation(config, scheduler=scheduler)


def go_to(presentation, label):
    while str(presentation.current) != label:
        assert presentation.next(), f"never reached {label}"


def test_starts_on_instructions(four_three_two):
    assert four_three_two.index == 0
    assert four_three_two.current.type == SlideType.INSTRUCTIONS
    assert not four_three_two.is_terminal


def test_entering_a_round_loads_its_duration_paused(four_three_two):
    go_to(four_three_two, "round(1)")

    assert four_three_two.timer.seconds_remaining == 180
    assert four_three_two.timer.running is False


def test_next_stops_at_exit(four_three_two):
    steps = len(four_three_two.sequence) - 1
    for _ in range(steps):
        assert four_three_two.next() is True

    assert four_three_two.is_terminal
    assert four_three_two.next() is False
    assert four_three_two.index == steps


def test_thinking_countdown_starts_automatically(scheduler):
    config = FourThreeTwoConfig(prompt="Topic", rounds=[3, 2])
    presentation = Presentation(config, thinking_seconds=10, scheduler=scheduler)

    presentation.next()
    assert presentation.current.type == SlideType.THINKING
    assert presentation.thinking_timer.running
    assert presentation.thinking_timer.seconds_remaining == 10

    scheduler.advance(10)
    assert presentation.thinking_timer.seconds_remaining == 0
    # Expiry does not move the slide on
    assert presentation.current.type == SlideType.THINKING


def test_leaving_a_slide_pauses_its_timers(four_three_two, scheduler):
    go_to(four_three_two, "thinking")
    four_three_two.next()
    assert four_three_two.thinking_timer.running is False

    go_to(four_three_two, "round(0)")
    four_three_two.toggle_timer()
    scheduler.advance(3)
    assert four_three_two.timer.seconds_remaining == 237

    four_three_two.next()
    assert four_three_two.timer.running is False
    assert scheduler.pending == []


def test_reset_timer_restores_slide_duration(four_three_two, scheduler):
    go_to(four_three_two, "round(2)")
    four_three_two.toggle_timer()
    scheduler.advance(30)

    four_three_two.reset_timer()

    assert four_three_two.timer.seconds_remaining == 120
    assert four_three_two.timer.running is False


def test_previous_only_where_supported(four_three_two, this_or_that):
    four_three_two.next()
    assert four_three_two.can_go_back is False
    assert four_three_two.previous() is False
    assert four_three_two.current.type == SlideType.THINKING

    this_or_that.next()
    this_or_that.next()
    assert str(this_or_that.current) == "choice(1)"
    assert this_or_that.previous() is True
    assert str(this_or_that.current) == "choice(0)"


def test_listeners_hear_every_transition(four_three_two):
    seen = []
    four_three_two.subscribe(lambda: seen.append(str(four_three_two.current)))

    four_three_two.next()
    four_three_two.next()

    assert seen == ["thinking", "get-ready"]


def test_choice_timer_auto_starts_and_auto_advances(this_or_that, scheduler):
    this_or_that.next()
    assert str(this_or_that.current) == "choice(0)"
    assert this_or_that.timer.running

    scheduler.advance(5)
    assert this_or_that.timer.seconds_remaining == 0
    assert str(this_or_that.current) == "choice(0)"

    scheduler.advance(AUTO_ADVANCE_DELAY)
    assert str(this_or_that.current) == "choice(1)"
    assert this_or_that.timer.seconds_remaining == 5
    assert this_or_that.timer.running


def test_last_choice_does_not_auto_advance_to_results(this_or_that, scheduler):
    go_to(this_or_that, "choice(2)")

    scheduler.advance(5 + AUTO_ADVANCE_DELAY + 1)

    assert str(this_or_that.current) == "choice(2)"


def test_manual_navigation_cancels_pending_auto_advance(this_or_that, scheduler):
    go_to(this_or_that, "choice(1)")
    scheduler.advance(5)

    this_or_that.previous()
    scheduler.advance(AUTO_ADVANCE_DELAY)

    assert str(this_or_that.current) == "choice(0)"


def test_no_auto_advance_when_disabled(scheduler):
    config = ThisOrThatConfig(
        sets=[ChoiceSet(options=["A", "B"]), ChoiceSet(options=["C", "D"])],
        timer_enabled=True,
        timer_seconds=3,
        auto_advance=False,
    )
    presentation = Presentation(config, scheduler=scheduler)
    presentation.next()

    scheduler.advance(10)

    assert str(presentation.current) == "choice(0)"


def test_votes_count_per_set(this_or_that):
    with pytest.raises(ValueError):
        this_or_that.vote("Tea")

    this_or_that.next()
    this_or_that.vote("Tea")
    this_or_that.vote("Tea")
    this_or_that.vote("Coffee")

    assert this_or_that.votes[0].count("Tea") == 2
    assert this_or_that.votes.winner(0) == "Tea"
    assert this_or_that.votes[1].total() == 0


def test_agree_disagree_tally(scheduler):
    config = AgreeDisagreeConfig(statement="Homework should be banned.")
    presentation = Presentation(config, scheduler=scheduler)
    go_to(presentation, "tally")

    for _ in range(3):
        presentation.increment("agree")
    presentation.increment("disagree")

    assert presentation.tally.percentage("agree") == 75
    assert presentation.tally.percentage("disagree") == 25


def test_restart_clears_counts_and_returns_to_start(scheduler):
    config = AgreeDisagreeConfig(statement="Homework should be banned.", scale="extended")
    presentation = Presentation(config, scheduler=scheduler)
    go_to(presentation, "tally")
    presentation.increment("strongly_agree")
    go_to(presentation, "exit")

    presentation.restart()

    assert presentation.index == 0
    assert presentation.tally.total() == 0
    assert presentation.thinking_timer.seconds_remaining == presentation.thinking_seconds


def test_card_timer_only_when_enabled(scheduler):
    cards = [Card(id="a", prompt="Why?"), Card(id="b", prompt="How?")]

    untimed = Presentation(QuestionCardsConfig(cards=cards), scheduler=scheduler)
    go_to(untimed, "card-revealed(0)")
    assert untimed.timer.total_seconds == 0

    timed = Presentation(
        QuestionCardsConfig(cards=cards, timer_enabled=True, timer_minutes=2),
        scheduler=scheduler,
    )
    go_to(timed, "card-revealed(1)")
    assert timed.timer.seconds_remaining == 120
    assert timed.timer.running is False


def test_timed_talk_countup(scheduler):
    config = TimedTalkConfig(
        prompt=TalkPrompt(question="Describe a book.", points=["title", "plot"]),
        speaking_minutes=1,
        timer_mode="countup",
    )
    presentation = Presentation(config, scheduler=scheduler)
    go_to(presentation, "round(0)")

    assert presentation.timer.mode == TimerMode.COUNTUP
    assert presentation.timer.display == "0:00"

    presentation.toggle_timer()
    scheduler.advance(15)
    assert presentation.timer.display == "0:15"


def test_close_cancels_everything(this_or_that, scheduler):
    this_or_that.next()
    assert scheduler.pending

    this_or_that.close()

    assert scheduler.pending == []


def test_exit_is_terminal_even_where_previous_is_supported(this_or_that):
    go_to(this_or_that, "exit")

    assert this_or_that.can_go_back is False
    assert this_or_that.previous() is False
    assert this_or_that.is_terminal


def test_play_after_expiry_reloads_the_duration(this_or_that, scheduler):
    go_to(this_or_that, "choice(2)")
    scheduler.advance(5)
    assert this_or_that.timer.expired

    this_or_that.toggle_timer()

    assert this_or_that.timer.running
    assert this_or_that.timer.seconds_remaining == 5
    scheduler.advance(2)
    assert this_or_that.timer.seconds_remaining == 3


def test_controls_for_another_activity_raise_value_error(four_three_two, scheduler):
    with pytest.raises(ValueError, match="no agree/disagree tally"):
        four_three_two.increment("agree")
    with pytest.raises(ValueError):
        four_three_two.reset_tally()

    poll = Presentation(AgreeDisagreeConfig(statement="Tea is better."), scheduler=scheduler)
    with pytest.raises(ValueError, match="no choice votes"):
        poll.reset_votes()
    with pytest.raises(ValueError):
        poll.vote("agree")


@pytest.fixture
def choice_grid(scheduler):
    config = ThisOrThatConfig(
        sets=[ChoiceSet(options=["Tea", "Coffee"]), ChoiceSet(options=["Cats", "Dogs"])],
        display_mode="all_at_once",
        timer_enabled=True,
        timer_seconds=5,
    )
    return Presentation(config, scheduler=scheduler)


def test_choice_grid_votes_on_any_set(choice_grid):
    go_to(choice_grid, "choice-grid")

    choice_grid.vote("Dogs", set_index=1)
    choice_grid.vote("Tea", set_index=0)
    choice_grid.vote("Dogs", set_index=1)

    assert choice_grid.votes[1].count("Dogs") == 2
    assert choice_grid.votes[0].count("Tea") == 1
    with pytest.raises(ValueError):
        choice_grid.vote("Tea")
    with pytest.raises(ValueError):
        choice_grid.vote("Tea", set_index=-1)


def test_choice_grid_has_no_timer(choice_grid, scheduler):
    go_to(choice_grid, "choice-grid")

    assert choice_grid.timer.total_seconds == 0
    assert choice_grid.timer.running is False
    assert scheduler.pending == []


def test_timer_can_start_on_first_vote(scheduler):
    config = ThisOrThatConfig(
        sets=[ChoiceSet(options=["Tea", "Coffee"]), ChoiceSet(options=["Cats", "Dogs"])],
        timer_enabled=True,
        timer_seconds=5,
        auto_start_timer=False,
        start_timer_on_input=True,
    )
    presentation = Presentation(config, scheduler=scheduler)
    presentation.next()
    assert presentation.timer.running is False

    presentation.vote("Tea")
    assert presentation.timer.running

    scheduler.advance(2)
    presentation.toggle_timer()
    presentation.vote("Coffee")
    # Only an untouched timer is started by input
    assert presentation.timer.running is False
    assert presentation.timer.seconds_remaining == 3


def test_votes_leave_a_manual_timer_alone(scheduler):
    config = ThisOrThatConfig(
        sets=[ChoiceSet(options=["Tea", "Coffee"])],
        timer_enabled=True,
        timer_seconds=5,
        auto_start_timer=False,
    )
    presentation = Presentation(config, scheduler=scheduler)
    presentation.next()

    presentation.vote("Tea")

    assert presentation.timer.running is False
