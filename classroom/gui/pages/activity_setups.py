import logging
from typing import Dict, List

from nicegui import ui

from classroom.generation import GenerationResult, item_key
from classroom.gui.pages.setup import SetupPage
from classroom.models.session_config import (
    MAX_ROUND_MINUTES,
    MIN_ROUND_MINUTES,
    AgreeDisagreeConfig,
    Card,
    ChoiceSet,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    TalkPrompt,
    ThisOrThatConfig,
    TimedTalkConfig,
    clamp_round_minutes,
    preset_rounds,
)

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


class _PickOneSetup(SetupPage):
    """Generated candidates shown as a list; clicking one copies it into the editable text."""

    text_label = "Topic"

    def __init__(self, *args, **kwargs):
        self.text = ""
        self.candidates: List[str] = []
        super().__init__(*args, **kwargs)

    def has_content(self) -> bool:
        return bool(self.text.strip()) or bool(self.candidates)

    def exclusions(self) -> List[str]:
        return list(self.candidates)

    def render_content(self):
        self.candidate_view()
        ui.textarea(self.text_label).bind_value(self, "text").classes("w-full").props("autogrow")

    @ui.refreshable
    def candidate_view(self):
        if not self.candidates:
            return
        ui.label("Pick one, then edit it if you like:").classes("text-sm text-gray-500")
        for candidate in self.candidates:
            with ui.card().classes("w-full cursor-pointer p-3").on(
                "click", lambda c=candidate: self._choose(c)
            ):
                ui.label(candidate)

    def _choose(self, candidate: str):
        self.text = candidate

    def apply_generated(self, result: GenerationResult):
        self.candidates = [str(item) for item in result.items]
        if not self.text.strip() and self.candidates:
            self.text = self.candidates[0]
        self.candidate_view.refresh()


class FourThreeTwoSetup(_PickOneSetup):
    activity_key = "four_three_two"
    text_label = "Speaking prompt"

    def __init__(self, *args, **kwargs):
        self.num_rounds = 3
        self.round_minutes = preset_rounds(3)
        super().__init__(*args, **kwargs)

    def prefill(self, config: FourThreeTwoConfig):
        super().prefill(config)
        self.text = config.prompt
        self.num_rounds = len(config.rounds)
        self.round_minutes = list(config.rounds)

    def render_settings(self):
        ui.select(
            {2: "2 rounds", 3: "3 rounds", 4: "4 rounds"},
            label="Rounds",
            on_change=lambda e: self._set_rounds(e.value),
        ).bind_value(self, "num_rounds").classes("w-40")
        self.rounds_view()

    def _set_rounds(self, num_rounds):
        if num_rounds is None:
            return
        self.round_minutes = preset_rounds(int(num_rounds))
        self.rounds_view.refresh()

    @ui.refreshable
    def rounds_view(self):
        with ui.row().classes("gap-4"):
            for i, minutes in enumerate(self.round_minutes):
                ui.number(
                    f"Round {i + 1} (min)",
                    value=minutes,
                    min=MIN_ROUND_MINUTES,
                    max=MAX_ROUND_MINUTES,
                    step=1,
                    on_change=lambda e, i=i: self._set_minutes(i, e.value),
                ).classes("w-28")

    def _set_minutes(self, index: int, value):
        if value is None:
            return
        self.round_minutes[index] = clamp_round_minutes(value)

    def build_config(self):
        return FourThreeTwoConfig(
            prompt=self.text.strip(),
            rounds=[clamp_round_minutes(m) for m in self.round_minutes],
            show_feedback=self.show_feedback,
            interaction_mode=self.interaction_mode,
        )


class AgreeDisagreeSetup(_PickOneSetup):
    activity_key = "agree_disagree"
    text_label = "Statement"

    def __init__(self, *args, **kwargs):
        self.scale = "simple"
        super().__init__(*args, **kwargs)

    def prefill(self, config: AgreeDisagreeConfig):
        super().prefill(config)
        self.text = config.statement
        self.scale = config.scale

    def render_settings(self):
        ui.label("Answer scale").classes("text-sm")
        ui.toggle(
            {"simple": "Agree / Disagree", "extended": "Four-point scale"}
        ).bind_value(self, "scale")

    def build_config(self):
        return AgreeDisagreeConfig(
            statement=self.text.strip(),
            scale=self.scale,
            show_feedback=self.show_feedback,
            interaction_mode=self.interaction_mode,
        )


class QuestionCardsSetup(SetupPage):
    activity_key = "question_cards"
    default_count = 5
    default_show_feedback = False

    def __init__(self, *args, **kwargs):
        self.cards: List[str] = []
        self.timer_enabled = False
        self.timer_minutes = 1
        super().__init__(*args, **kwargs)

    def prefill(self, config: QuestionCardsConfig):
        super().prefill(config)
        self.cards = [card.prompt for card in config.cards]
        self.timer_enabled = config.timer_enabled
        self.timer_minutes = config.timer_minutes

    def has_content(self) -> bool:
        return any(c.strip() for c in self.cards)

    def exclusions(self) -> List[str]:
        return [c for c in self.cards if c.strip()]

    def render_content(self):
        ui.number("Number of cards", min=1, max=20, step=1).bind_value(
            self, "count", forward=lambda v: int(v or 1)
        ).classes("w-40").bind_visibility_from(self, "source", value="ai")
        self.cards_view()
        ui.button("Add card", icon="add", on_click=self._add_card).props("flat")

    @ui.refreshable
    def cards_view(self):
        for i, text in enumerate(self.cards):
            with ui.row().classes("w-full items-center gap-2 no-wrap"):
                ui.label(f"{i + 1}.").classes("w-6")
                ui.input(
                    value=text, on_change=lambda e, i=i: self._set_card(i, e.value)
                ).classes("grow")
                ui.button(
                    icon="refresh", on_click=lambda i=i: self.regenerate_card(i)
                ).props("flat round dense").tooltip("Replace with a new AI question").bind_visibility_from(
                    self, "source", value="ai"
                )
                ui.button(icon="delete", on_click=lambda i=i: self._remove_card(i)).props(
                    "flat round dense"
                )

    def _set_card(self, index: int, value: str):
        self.cards[index] = value or ""

    def _add_card(self):
        self.cards.append("")
        self.cards_view.refresh()

    def _remove_card(self, index: int):
        del self.cards[index]
        self.cards_view.refresh()

    async def regenerate_card(self, index: int):
        """Swaps a single card for a fresh one that repeats none of the others."""
        request = self.build_request(count=1, exclude=self.exclusions())
        result = await self.generate(request)
        if result is None or not result.items:
            return
        if index < len(self.cards):
            self.cards[index] = str(result.items[0])
            self.cards_view.refresh()

    def apply_generated(self, result: GenerationResult):
        self.cards = [str(item) for item in result.items]
        self.cards_view.refresh()

    def render_settings(self):
        with ui.row().classes("items-center gap-4"):
            ui.switch("Timer per card").bind_value(self, "timer_enabled")
            ui.number("Minutes", min=0, max=10, step=1).bind_value(
                self, "timer_minutes", forward=lambda v: int(v or 0)
            ).classes("w-28").bind_visibility_from(self, "timer_enabled")

    def build_config(self):
        prompts = [c.strip() for c in self.cards if c.strip()]
        if not prompts:
            raise ValueError("Add at least one question card.")
        return QuestionCardsConfig(
            cards=[Card(id=f"card-{i + 1}", prompt=p) for i, p in enumerate(prompts)],
            timer_enabled=self.timer_enabled,
            timer_minutes=self.timer_minutes,
            show_feedback=self.show_feedback,
            interaction_mode=self.interaction_mode,
        )


class TimedTalkSetup(SetupPage):
    activity_key = "timed_talk"
    default_count = 1

    def __init__(self, *args, **kwargs):
        self.question = ""
        self.points_text = ""
        self.speaking_minutes = 2
        self.timer_mode = "countdown"
        self.history: List[str] = []
        super().__init__(*args, **kwargs)

    def prefill(self, config: TimedTalkConfig):
        super().prefill(config)
        self.question = config.prompt.question
        self.points_text = "\n".join(config.prompt.points)
        self.speaking_minutes = config.speaking_minutes
        self.timer_mode = config.timer_mode

    def has_content(self) -> bool:
        return bool(self.question.strip())

    def exclusions(self) -> List[str]:
        return list(self.history)

    def render_content(self):
        ui.input("Question").bind_value(self, "question").classes("w-full")
        ui.textarea("Points to cover (one per line)").bind_value(
            self, "points_text"
        ).classes("w-full").props("autogrow")

    def apply_generated(self, result: GenerationResult):
        prompt = result.items[0]
        self.question = prompt.question
        self.points_text = "\n".join(prompt.points)
        self.history.append(item_key(prompt))

    def render_settings(self):
        with ui.row().classes("items-center gap-4"):
            ui.number("Speaking time (min)", min=1, max=5, step=1).bind_value(
                self, "speaking_minutes", forward=lambda v: int(v or 1)
            ).classes("w-40")
            ui.toggle({"countdown": "Count down", "countup": "Count up"}).bind_value(
                self, "timer_mode"
            )

    def build_config(self):
        return TimedTalkConfig(
            prompt=TalkPrompt(question=self.question.strip(), points=split_lines(self.points_text)),
            speaking_minutes=self.speaking_minutes,
            timer_mode=self.timer_mode,
            show_feedback=self.show_feedback,
            interaction_mode=self.interaction_mode,
        )


TIMER_STARTS = {
    "entry": "When the set appears",
    "first_vote": "On the first vote",
    "manual": "When I press play",
}


def timer_start_policy(config) -> str:
    if config.auto_start_timer:
        return "entry"
    if config.start_timer_on_input:
        return "first_vote"
    return "manual"


class ThisOrThatSetup(SetupPage):
    activity_key = "this_or_that"
    default_count = 5
    has_reflection_toggle = False
    default_show_feedback = False

    def __init__(self, *args, **kwargs):
        self.sets_text = ""
        self.options_per_set = 2
        self.timer_enabled = False
        self.timer_seconds = 30
        self.auto_advance = True
        self.display_mode = "set_by_set"
        self.timer_starts = "entry"
        # Sets produced earlier this session, so a new batch never repeats them
        self.history: List[str] = []
        super().__init__(*args, **kwargs)

    def prefill(self, config: ThisOrThatConfig):
        super().prefill(config)
        self.sets_text = "\n".join(" / ".join(s.options) for s in config.sets)
        self.options_per_set = len(config.sets[0].options)
        self.timer_enabled = config.timer_enabled
        self.timer_seconds = config.timer_seconds
        self.auto_advance = config.auto_advance
        self.display_mode = config.display_mode
        self.timer_starts = timer_start_policy(config)

    def has_content(self) -> bool:
        return bool(split_lines(self.sets_text))

    def exclusions(self) -> List[str]:
        return list(self.history)

    def build_request(self, count=None, exclude=None):
        request = super().build_request(count=count, exclude=exclude)
        return request.model_copy(update={"options_per_set": self.options_per_set})

    def render_content(self):
        with ui.row().classes("items-center gap-4").bind_visibility_from(
            self, "source", value="ai"
        ):
            ui.number("Number of sets", min=1, max=20, step=1).bind_value(
                self, "count", forward=lambda v: int(v or 1)
            ).classes("w-36")
            ui.select(
                {2: "2 options", 3: "3 options", 4: "4 options"}, label="Options per set"
            ).bind_value(self, "options_per_set").classes("w-36")
        ui.textarea("One set per line, options separated by /", placeholder="Coffee / Tea").bind_value(
            self, "sets_text"
        ).classes("w-full").props("autogrow")

    def apply_generated(self, result: GenerationResult):
        self.sets_text = "\n".join(" / ".join(s.options) for s in result.items)
        self.history.extend(item_key(s) for s in result.items)

    def render_settings(self):
        ui.toggle(
            {"set_by_set": "One set at a time", "all_at_once": "All sets at once"}
        ).bind_value(self, "display_mode")
        with ui.row().classes("items-center gap-4").bind_visibility_from(
            self, "display_mode", value="set_by_set"
        ):
            ui.switch("Timer per set").bind_value(self, "timer_enabled")
            ui.number("Seconds", min=5, max=300, step=5).bind_value(
                self, "timer_seconds", forward=lambda v: int(v or 0)
            ).classes("w-28").bind_visibility_from(self, "timer_enabled")
            ui.switch("Auto-advance when time is up").bind_value(
                self, "auto_advance"
            ).bind_visibility_from(self, "timer_enabled")
            ui.select(TIMER_STARTS, label="Timer starts").bind_value(
                self, "timer_starts"
            ).classes("w-44").bind_visibility_from(self, "timer_enabled")

    def parse_sets(self) -> List[ChoiceSet]:
        sets = []
        for n, line in enumerate(split_lines(self.sets_text), start=1):
            options = [o.strip() for o in line.split("/") if o.strip()]
            if not 2 <= len(options) <= 4:
                raise ValueError(f"Line {n} needs 2 to 4 options separated by '/'.")
            if len({o.lower() for o in options}) != len(options):
                raise ValueError(f"Line {n} repeats an option.")
            sets.append(ChoiceSet(options=options))
        if not sets:
            raise ValueError("Add at least one set of options.")
        return sets

    def build_config(self):
        return ThisOrThatConfig(
            sets=self.parse_sets(),
            timer_enabled=self.timer_enabled,
            timer_seconds=self.timer_seconds,
            auto_advance=self.auto_advance,
            display_mode=self.display_mode,
            auto_start_timer=self.timer_starts == "entry",
            start_timer_on_input=self.timer_starts == "first_vote",
            interaction_mode=self.interaction_mode,
        )


SETUP_PAGES: Dict[str, type] = {
    "four_three_two": FourThreeTwoSetup,
    "question_cards": QuestionCardsSetup,
    "agree_disagree": AgreeDisagreeSetup,
    "timed_talk": TimedTalkSetup,
    "this_or_that": ThisOrThatSetup,
}
