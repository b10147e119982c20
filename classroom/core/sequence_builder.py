"""
Slide Sequence Builder
======================
Expands a session configuration into the ordered slides of a presentation.

Every sequence has the same frame (instructions first, optional reflection,
exit last); the middle comes from the activity's strategy in STRATEGIES.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Literal

from classroom.models.session_config import (
    AgreeDisagreeConfig,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    ThisOrThatConfig,
    TimedTalkConfig,
)
from classroom.models.slide import Slide, SlideSequence, SlideType

logger = logging.getLogger(__name__)


# =============================================================================
# STRATEGY DATACLASS
# =============================================================================


@dataclass(frozen=True)
class SlideStrategy:
    """
    Middle-of-sequence expansion for one activity.

    Attributes:
        activity: SessionConfig discriminator this strategy handles
        family: Activity family, used for logging and the UI
        expand: Function (config) -> list of middle slides
    """

    activity: str
    family: Literal["round", "card", "poll", "talk", "choice"]
    expand: Callable[..., List[Slide]]


# =============================================================================
# EXPANSIONS
# =============================================================================


def expand_rounds(config: FourThreeTwoConfig) -> List[Slide]:
    slides = [Slide(type=SlideType.THINKING), Slide(type=SlideType.GET_READY)]
    last = len(config.rounds) - 1
    for i in range(len(config.rounds)):
        slides.append(Slide(type=SlideType.ROUND, index=i))
        if i != last:
            slides.append(Slide(type=SlideType.SWITCH, index=i))
    return slides


def expand_cards(config: QuestionCardsConfig) -> List[Slide]:
    slides = []
    for i in range(len(config.cards)):
        slides.append(Slide(type=SlideType.CARD_HIDDEN, index=i))
        slides.append(Slide(type=SlideType.CARD_REVEALED, index=i))
        if config.show_feedback:
            slides.append(Slide(type=SlideType.FEEDBACK, index=i))
    return slides


def expand_poll(config: AgreeDisagreeConfig) -> List[Slide]:
    return [
        Slide(type=SlideType.THINKING),
        Slide(type=SlideType.TALLY),
        Slide(type=SlideType.PAIRING),
        Slide(type=SlideType.DISCUSSION),
    ]


def expand_talk(config: TimedTalkConfig) -> List[Slide]:
    # A timed talk is a single speaking round after preparation
    return [Slide(type=SlideType.THINKING), Slide(type=SlideType.ROUND, index=0)]


def expand_choices(config: ThisOrThatConfig) -> List[Slide]:
    if config.display_mode == "all_at_once":
        return [Slide(type=SlideType.CHOICE_GRID), Slide(type=SlideType.TALLY)]
    slides = [Slide(type=SlideType.CHOICE, index=i) for i in range(len(config.sets))]
    slides.append(Slide(type=SlideType.TALLY))
    return slides


# =============================================================================
# REGISTRY
# =============================================================================


STRATEGIES: Dict[str, SlideStrategy] = {
    "four_three_two": SlideStrategy("four_three_two", "round", expand_rounds),
    "question_cards": SlideStrategy("question_cards", "card", expand_cards),
    "agree_disagree": SlideStrategy("agree_disagree", "poll", expand_poll),
    "timed_talk": SlideStrategy("timed_talk", "talk", expand_talk),
    "this_or_that": SlideStrategy("this_or_that", "choice", expand_choices),
}


def get_strategy(activity: str) -> SlideStrategy:
    strategy = STRATEGIES.get(activity)
    if strategy is None:
        raise ValueError(f"No slide strategy registered for activity '{activity}'.")
    return strategy


def build(config) -> SlideSequence:
    """Builds the slide sequence for a config. Pure: the config is only read."""
    strategy = get_strategy(config.activity)

    slides = [Slide(type=SlideType.INSTRUCTIONS)]
    slides.extend(strategy.expand(config))
    if config.show_feedback:
        slides.append(Slide(type=SlideType.REFLECTION))
    slides.append(Slide(type=SlideType.EXIT))

    logger.debug(
        f"Built {len(slides)} slides for {config.activity} ({strategy.family} family)"
    )
    return tuple(slides)
