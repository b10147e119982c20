"""
Session configurations.

A SessionConfig is the frozen set of parameters and content chosen on a
setup screen. One model per activity, discriminated by ``activity`` so a
serialized config can be loaded back without knowing its type up front.
"""

from typing import Annotated, ClassVar, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

InteractionMode = Literal["pairs", "groups"]
CEFRLevel = Literal["A1", "A2", "B1", "B2", "C1", "C2"]

MIN_ROUND_MINUTES = 1
MAX_ROUND_MINUTES = 6

# Default minutes per round, keyed by number of rounds
ROUND_PRESETS = {
    1: [4],
    2: [3, 2],
    3: [4, 3, 2],
    4: [4, 3, 2, 1],
}


def clamp_round_minutes(value: int) -> int:
    return max(MIN_ROUND_MINUTES, min(MAX_ROUND_MINUTES, int(value)))


def preset_rounds(num_rounds: int) -> List[int]:
    if num_rounds not in ROUND_PRESETS:
        raise ValueError(f"No round preset for {num_rounds} rounds.")
    return list(ROUND_PRESETS[num_rounds])


class BaseSessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_feedback: bool = Field(
        True, description="Adds a reflection slide (and per-card feedback)."
    )
    auto_start_timer: bool = Field(
        False, description="Start the slide timer on entry instead of waiting for Play."
    )
    start_timer_on_input: bool = Field(
        False,
        description="Start an untouched slide timer on the first vote or tally input.",
    )
    interaction_mode: InteractionMode = "pairs"

    # Activities with swipe-style navigation override this
    supports_previous: ClassVar[bool] = False


class FourThreeTwoConfig(BaseSessionConfig):
    activity: Literal["four_three_two"] = "four_three_two"
    prompt: str = Field(..., min_length=1)
    rounds: List[int] = Field(..., min_length=1, description="Minutes per round.")

    @field_validator("rounds")
    @classmethod
    def minutes_in_range(cls, v):
        if any(not MIN_ROUND_MINUTES <= m <= MAX_ROUND_MINUTES for m in v):
            raise ValueError(
                f"Round minutes must be between {MIN_ROUND_MINUTES} and {MAX_ROUND_MINUTES}."
            )
        return v

    def round_seconds(self, index: int) -> int:
        return self.rounds[index] * 60


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str = Field(..., min_length=1)


class QuestionCardsConfig(BaseSessionConfig):
    activity: Literal["question_cards"] = "question_cards"
    cards: List[Card] = Field(..., min_length=1)
    timer_enabled: bool = False
    timer_minutes: int = Field(1, ge=0)
    show_feedback: bool = False

    @property
    def card_seconds(self) -> int:
        return self.timer_minutes * 60


class AgreeDisagreeConfig(BaseSessionConfig):
    activity: Literal["agree_disagree"] = "agree_disagree"
    statement: str = Field(..., min_length=1)
    scale: Literal["simple", "extended"] = "simple"

    @property
    def tally_options(self) -> List[str]:
        if self.scale == "simple":
            return ["agree", "disagree"]
        return ["strongly_agree", "agree", "disagree", "strongly_disagree"]


class TalkPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1)
    points: List[str] = Field(default_factory=list)


class TimedTalkConfig(BaseSessionConfig):
    activity: Literal["timed_talk"] = "timed_talk"
    prompt: TalkPrompt
    speaking_minutes: int = Field(2, ge=0)
    timer_mode: Literal["countdown", "countup"] = "countdown"


class ChoiceSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    options: List[str] = Field(..., min_length=2, max_length=4)

    @field_validator("options")
    @classmethod
    def distinct_options(cls, v):
        if len({o.strip().lower() for o in v}) != len(v):
            raise ValueError("Options in a set must be different.")
        return v


class ThisOrThatConfig(BaseSessionConfig):
    activity: Literal["this_or_that"] = "this_or_that"
    sets: List[ChoiceSet] = Field(..., min_length=1)
    timer_enabled: bool = False
    timer_seconds: int = Field(30, ge=0)
    auto_advance: bool = True
    display_mode: Literal["set_by_set", "all_at_once"] = Field(
        "set_by_set", description="One set per slide, or every set on a single slide."
    )
    auto_start_timer: bool = True
    show_feedback: bool = False
    supports_previous: ClassVar[bool] = True


SessionConfig = Annotated[
    Union[
        FourThreeTwoConfig,
        QuestionCardsConfig,
        AgreeDisagreeConfig,
        TimedTalkConfig,
        ThisOrThatConfig,
    ],
    Field(discriminator="activity"),
]

SESSION_CONFIG_ADAPTER: TypeAdapter = TypeAdapter(SessionConfig)

CONFIG_TYPES = {
    "four_three_two": FourThreeTwoConfig,
    "question_cards": QuestionCardsConfig,
    "agree_disagree": AgreeDisagreeConfig,
    "timed_talk": TimedTalkConfig,
    "this_or_that": ThisOrThatConfig,
}


def config_type_for(activity: str) -> Optional[type]:
    return CONFIG_TYPES.get(activity)
