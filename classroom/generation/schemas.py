from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

from classroom.models.session_config import CEFRLevel, ChoiceSet, TalkPrompt

ActivityName = Literal[
    "four_three_two", "question_cards", "agree_disagree", "timed_talk", "this_or_that"
]

# A prompt, question or statement returned by the model
PromptText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]


class GeneratedTalkPrompt(TalkPrompt):
    points: List[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]] = (
        Field(..., min_length=1, max_length=6)
    )


class GeneratedChoiceSet(ChoiceSet):
    options: List[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]] = (
        Field(..., min_length=2, max_length=4)
    )


class GenerationRequest(BaseModel):
    activity: ActivityName
    cefr_level: CEFRLevel = "B1"
    count: int = Field(3, ge=1, le=20, description="How many items to ask for.")
    guidance: Optional[str] = Field(None, description="Teacher's topic guidance.")
    exclude: List[str] = Field(
        default_factory=list, description="Items already produced; never repeated."
    )
    options_per_set: int = Field(2, ge=2, le=4)

    @field_validator("guidance", mode="before")
    @classmethod
    def blank_guidance(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class GenerationResult(BaseModel):
    activity: ActivityName
    items: List[Any] = Field(default_factory=list)
    rejected: int = Field(0, description="Items dropped as malformed or repeated.")
    used_fallback: bool = False


def item_key(item: Any) -> str:
    """Identity used for de-duplication and exclusion lists."""
    if isinstance(item, ChoiceSet):
        return " / ".join(item.options).lower()
    if isinstance(item, TalkPrompt):
        return item.question.strip().lower()
    return str(item).strip().lower()
