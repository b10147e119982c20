from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SlideType(str, Enum):
    INSTRUCTIONS = "instructions"
    THINKING = "thinking"
    GET_READY = "get-ready"
    ROUND = "round"
    SWITCH = "switch"
    CARD_HIDDEN = "card-hidden"
    CARD_REVEALED = "card-revealed"
    FEEDBACK = "feedback"
    TALLY = "tally"
    PAIRING = "pairing"
    DISCUSSION = "discussion"
    CHOICE = "choice"
    CHOICE_GRID = "choice-grid"
    REFLECTION = "reflection"
    EXIT = "exit"


class Slide(BaseModel):
    """One screen of a presentation flow. Never mutated once built."""

    model_config = ConfigDict(frozen=True)

    type: SlideType
    index: Optional[int] = Field(
        None, ge=0, description="Round, card or set this slide refers to."
    )

    def __str__(self) -> str:
        if self.index is None:
            return self.type.value
        return f"{self.type.value}({self.index})"


SlideSequence = Tuple[Slide, ...]
