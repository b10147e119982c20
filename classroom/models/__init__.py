from classroom.models.slide import Slide, SlideSequence, SlideType
from classroom.models.session_config import (
    AgreeDisagreeConfig,
    BaseSessionConfig,
    Card,
    ChoiceSet,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    SessionConfig,
    TalkPrompt,
    ThisOrThatConfig,
    TimedTalkConfig,
)

__all__ = [
    "Slide",
    "SlideSequence",
    "SlideType",
    "AgreeDisagreeConfig",
    "BaseSessionConfig",
    "Card",
    "ChoiceSet",
    "FourThreeTwoConfig",
    "QuestionCardsConfig",
    "SessionConfig",
    "TalkPrompt",
    "ThisOrThatConfig",
    "TimedTalkConfig",
]
