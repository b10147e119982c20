import logging

from nicegui import Client, ui

from classroom.config import AppSettings
from classroom.core.presentation import Presentation
from classroom.gui.activities import ACTIVITIES
from classroom.gui.components.chime import Chime
from classroom.gui.components.tally_panel import TallyPanel
from classroom.gui.components.timer_display import TimerDisplay
from classroom.gui.theme import Theme
from classroom.models.session_config import (
    AgreeDisagreeConfig,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    ThisOrThatConfig,
    TimedTalkConfig,
)

logger = logging.getLogger(__name__)

REFLECTION_QUESTIONS = [
    "What was easier to say the second or third time?",
    "Which new words or phrases did you use?",
    "What would you do differently next time?",
]


class PresentPage:
    """Full-screen slide flow for one loaded SessionConfig."""

    def __init__(self, config, settings: AppSettings, theme: Theme, client: Client):
        self.config = config
        self.theme = theme
        self.activity = ACTIVITIES[config.activity]
        self.presentation = Presentation(config, thinking_seconds=settings.thinking_seconds)

        self.chime = Chime(client)
        self.presentation.timer.on_expire(self.chime.play)
        self.timer_display = TimerDisplay(
            self.presentation.timer,
            on_toggle=self.presentation.toggle_timer,
            on_reset=self.presentation.reset_timer,
        )
        self.thinking_label = None
        self.presentation.thinking_timer.subscribe(self._refresh_thinking)
        self.presentation.subscribe(self.slide_view.refresh)
        client.on_disconnect(self.presentation.close)

    # --- Helpers ---

    @property
    def partner_word(self) -> str:
        return "group" if self.config.interaction_mode == "groups" else "partner"

    def _refresh_thinking(self):
        if self.thinking_label is None or self.thinking_label.is_deleted:
            return
        seconds = self.presentation.thinking_timer.seconds_remaining
        self.thinking_label.set_text(f"{seconds}s")
        if seconds <= 5:
            self.thinking_label.classes(add="text-red-500")

    def _next_button(self, text: str):
        return Theme.primary_button(text, self.presentation.next, icon="chevron_right")

    def _topic(self):
        config = self.config
        if isinstance(config, FourThreeTwoConfig):
            ui.label(f'"{config.prompt}"').classes("slide-quote text-center")
        elif isinstance(config, AgreeDisagreeConfig):
            ui.label(f'"{config.statement}"').classes("slide-quote text-center")
        elif isinstance(config, TimedTalkConfig):
            ui.label(config.prompt.question).classes("slide-quote text-center")
            with ui.column().classes("gap-1"):
                for point in config.prompt.points:
                    ui.label(f"• {point}").classes("text-lg")

    # --- Render ---

    def render(self):
        self.theme.header(self.activity.title, back_to=self.activity.setup_path)
        with ui.column().classes("w-full min-h-[80vh] items-center justify-center p-6 gap-6"):
            self.slide_view()
            ui.label().bind_text_from(
                self.presentation, "index",
                backward=lambda i: f"{i + 1} / {len(self.presentation.sequence)}",
            ).classes("text-xs text-gray-500")

    @ui.refreshable
    def slide_view(self):
        slide = self.presentation.current
        with ui.column().classes("w-full max-w-4xl items-center gap-6 text-center"):
            renderer = getattr(self, f"_render_{slide.type.name.lower()}")
            renderer(slide.index)

    def _render_instructions(self, _):
        ui.label(self.activity.title).classes("slide-title")
        with ui.column().classes("gap-2 text-lg"):
            for line in self.activity.instructions:
                ui.label(line.format(partner=self.partner_word))
        self._next_button("Start" if isinstance(self.config, QuestionCardsConfig) else "Continue")

    def _render_thinking(self, _):
        ui.label("TOPIC").classes("text-sm font-bold text-gray-500")
        self._topic()
        ui.label("Take a moment to think. What are the key ideas you want to include?").classes(
            "text-lg"
        )
        self.thinking_label = ui.label().classes("text-5xl font-bold")
        self._refresh_thinking()
        if isinstance(self.config, AgreeDisagreeConfig):
            self._next_button("Show options")
        elif isinstance(self.config, TimedTalkConfig):
            self._next_button("Start speaking")
        else:
            self._next_button("Get ready")

    def _render_get_ready(self, _):
        ui.label("Get ready to speak.").classes("slide-title")
        ui.label("You will speak without stopping. Focus on getting your ideas out clearly.").classes(
            "text-lg"
        )
        self._next_button("Start Round 1")

    def _render_round(self, index):
        config = self.config
        if isinstance(config, FourThreeTwoConfig):
            last = index == len(config.rounds) - 1
            ui.label("FINAL ROUND" if last else f"ROUND {index + 1}").classes(
                "text-sm font-bold text-gray-500"
            )
            ui.label(f"Time: {config.rounds[index]} minutes").classes("text-lg")
            label = "Finish" if last else f"Switch {self.partner_word}s"
        else:
            ui.label("SPEAK NOW").classes("text-sm font-bold text-gray-500")
            label = "Finish"
        self._topic()
        self.timer_display.render()
        self._next_button(label)

    def _render_switch(self, index):
        minutes = self.config.rounds[index + 1]
        ui.label(f"Switch {self.partner_word}s!").classes("slide-title")
        ui.label(
            f"Find a new {self.partner_word}. Same topic, less time: {minutes} minutes."
        ).classes("text-lg")
        self._next_button(f"Start Round {index + 2}")

    def _render_card_hidden(self, index):
        ui.label(f"Card {index + 1} of {len(self.config.cards)}").classes("text-sm text-gray-500")
        with ui.card().classes(
            "w-80 h-48 items-center justify-center cursor-pointer bg-violet-600"
        ).on("click", self.presentation.next):
            ui.icon("forum", size="64px").classes("text-white")
            ui.label("Turn over the card.").classes("text-white")
        self._next_button("Reveal card")

    def _render_card_revealed(self, index):
        card = self.config.cards[index]
        ui.label(f"Card {index + 1} of {len(self.config.cards)}").classes("text-sm text-gray-500")
        with Theme.card():
            ui.label(card.prompt).classes("slide-quote")
            ui.label("Take turns speaking. Ask follow-up questions if you can.").classes(
                "text-sm text-gray-500"
            )
        if self.config.timer_enabled:
            self.timer_display.render()
        last = index == len(self.config.cards) - 1
        self._next_button("Finish" if last and not self.config.show_feedback else "Next")

    def _render_feedback(self, index):
        ui.label("How did it go?").classes("slide-title")
        ui.label("Share one interesting thing your partner said.").classes("text-lg")
        self._next_button("Next card" if index < len(self.config.cards) - 1 else "Finish")

    def _render_tally(self, _):
        if isinstance(self.config, ThisOrThatConfig):
            self._render_results()
            return
        ui.label("What do you think?").classes("slide-title")
        self._topic()
        TallyPanel(
            self.presentation.tally,
            on_increment=self.presentation.increment,
            on_decrement=self.presentation.decrement,
        ).render()
        with ui.row().classes("gap-2"):
            ui.button("Reset", icon="restart_alt", on_click=self.presentation.reset_tally).props(
                "flat"
            )
            self._next_button("Pair students")

    def _render_results(self):
        ui.label("Results").classes("slide-title")
        votes = self.presentation.votes
        for i, choice_set in enumerate(self.config.sets):
            tally = votes[i]
            winner = votes.winner(i)
            with ui.card().classes("w-full"):
                with ui.row().classes("w-full justify-around"):
                    for option in choice_set.options:
                        with ui.column().classes("items-center"):
                            icon = "emoji_events" if option == winner else None
                            ui.label(option).classes("text-lg font-bold")
                            if icon:
                                ui.icon(icon).classes("text-amber-500")
                            ui.label(f"{tally.count(option)} votes, {tally.percentage(option)}%")
        with ui.row().classes("gap-2"):
            ui.button("Reset votes", icon="restart_alt", on_click=self.presentation.reset_votes).props(
                "flat"
            )
            self._next_button("Continue")

    def _render_pairing(self, _):
        ui.label("Pair up with someone who chose differently").classes("slide-title")
        ui.label("Listen first. Try to understand their reasons.").classes("text-lg")
        self._next_button("Start discussion")

    def _render_discussion(self, _):
        ui.label(f"Discuss with your {self.partner_word}:").classes("slide-title")
        self._topic()
        with ui.column().classes("gap-1 text-lg"):
            ui.label("Why do you think that?")
            ui.label("Can you give an example?")
            ui.label("Has anything made you change your mind?")
        self._next_button("Continue")

    def _render_choice(self, index):
        choice_set = self.config.sets[index]
        tally = self.presentation.votes[index]
        ui.label(f"Set {index + 1} of {len(self.config.sets)}").classes("text-sm text-gray-500")
        with ui.row().classes("w-full justify-center items-stretch gap-6"):
            for n, option in enumerate(choice_set.options):
                if n:
                    ui.label("or").classes("self-center text-2xl text-gray-500")
                with ui.card().classes("items-center cursor-pointer min-w-[200px] p-6").on(
                    "click", lambda o=option: self.presentation.vote(o)
                ):
                    ui.label(option).classes("text-3xl font-bold")
                    ui.label(f"{tally.count(option)} ({tally.percentage(option)}%)").classes(
                        "text-gray-500"
                    )
        if self.config.timer_enabled:
            self.timer_display.render()
        with ui.row().classes("gap-2"):
            ui.button(icon="chevron_left", on_click=self.presentation.previous).props(
                "round flat"
            ).set_enabled(self.presentation.can_go_back)
            last = index == len(self.config.sets) - 1
            self._next_button("See results" if last else "Next")

    def _render_choice_grid(self, _):
        ui.label("Which do you prefer?").classes("slide-title")
        votes = self.presentation.votes
        for i, choice_set in enumerate(self.config.sets):
            tally = votes[i]
            with ui.card().classes("w-full"):
                with ui.row().classes("w-full justify-around items-center"):
                    for option in choice_set.options:
                        with ui.column().classes("items-center cursor-pointer p-2").on(
                            "click", lambda s=i, o=option: self.presentation.vote(o, set_index=s)
                        ):
                            ui.label(option).classes("text-xl font-bold")
                            ui.label(f"{tally.count(option)} ({tally.percentage(option)}%)").classes(
                                "text-gray-500"
                            )
        self._next_button("See results")

    def _render_reflection(self, _):
        ui.label("REFLECTION").classes("text-sm font-bold text-gray-500")
        with ui.column().classes("gap-2 text-xl"):
            for question in self.activity.reflection or REFLECTION_QUESTIONS:
                ui.label(question.format(partner=self.partner_word))
        self._next_button("Continue")

    def _render_exit(self, _):
        ui.label("What would you like to do next?").classes("slide-title")
        with ui.column().classes("gap-2"):
            Theme.primary_button("Repeat with the same content", self.presentation.restart, icon="replay")
            ui.button(
                "Create new content", icon="edit",
                on_click=lambda: ui.navigate.to(self.activity.setup_path),
            ).props("flat")
            ui.button("Exit to activities", icon="home", on_click=lambda: ui.navigate.to("/")).props(
                "flat"
            )
