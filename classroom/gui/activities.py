from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ActivityInfo:
    """Display text for one activity. `{partner}` expands to partner/group."""

    key: str
    title: str
    tagline: str
    icon: str
    instructions: List[str]
    reflection: List[str] = field(default_factory=list)

    @property
    def setup_path(self) -> str:
        return f"/speaking/{self.key}"

    @property
    def present_path(self) -> str:
        return f"/speaking/{self.key}/present"


ACTIVITIES: Dict[str, ActivityInfo] = {
    "four_three_two": ActivityInfo(
        key="four_three_two",
        title="4-3-2 Speaking",
        tagline="Build fluency through repetition",
        icon="timer",
        instructions=[
            "Your goal: talk about the same topic three times, with less time each round.",
            "Each round you speak to a new {partner}.",
            "For the listener: just listen. Nod, smile, but don't interrupt.",
        ],
        reflection=[
            "Was it easier the second or third time? Why?",
            "What did you leave out when you had less time?",
            "Which words or phrases did you reuse?",
        ],
    ),
    "question_cards": ActivityInfo(
        key="question_cards",
        title="Speaking Cards",
        tagline="One question at a time, no right answers",
        icon="style",
        instructions=[
            "Turn over one card at a time.",
            "Discuss the question with your {partner}.",
            "There are no right answers.",
        ],
        reflection=[
            "Which question gave you the most to talk about?",
            "What did you learn about your {partner}?",
        ],
    ),
    "agree_disagree": ActivityInfo(
        key="agree_disagree",
        title="Agree / Disagree",
        tagline="Take a side, then understand the other one",
        icon="thumbs_up_down",
        instructions=[
            "You will see a statement. Decide whether you agree or disagree.",
            "Then pair up with someone who thinks differently.",
            "The goal is to understand, not to win.",
        ],
        reflection=[
            "Did anything your partner said make you think again?",
            "What was the strongest reason you heard?",
        ],
    ),
    "timed_talk": ActivityInfo(
        key="timed_talk",
        title="Timed Talk",
        tagline="Prepare, then speak for the full time",
        icon="record_voice_over",
        instructions=[
            "You will see a topic with four points to cover.",
            "You have a short time to prepare.",
            "Then speak until the timer ends.",
        ],
        reflection=[
            "Did you cover all four points?",
            "Where did you pause, and why?",
        ],
    ),
    "this_or_that": ActivityInfo(
        key="this_or_that",
        title="This or That",
        tagline="Quick-fire choices to spark opinions",
        icon="compare_arrows",
        instructions=[
            "Choose one option from each set.",
            "Tell your {partner} why: I prefer... because...",
            "Tap an option to count the votes.",
        ],
    ),
}
