import asyncio
import logging
from typing import List, Optional

from nicegui import ui
from pydantic import ValidationError

from classroom.config import AppSettings
from classroom.generation import (
    ContentGenerator,
    GenerationError,
    GenerationRequest,
    GenerationResult,
)
from classroom.gui.activities import ACTIVITIES
from classroom.gui.theme import Theme
from classroom.session import SessionHandoff

logger = logging.getLogger(__name__)

CEFR_LEVELS = ["A1", "A2", "B1", "B2", "C1", "C2"]


def friendly_error(e: Exception) -> str:
    if isinstance(e, ValidationError):
        first = e.errors()[0]
        where = ".".join(str(p) for p in first.get("loc", ()))
        return f"{where}: {first['msg']}" if where else first["msg"]
    return str(e)


class SetupPage:
    """
    Base for the per-activity setup screens.

    Subclasses render their own content and settings, turn the form into a
    SessionConfig (build_config) and take generated items (apply_generated).
    Generation runs as a cancellable task; on failure the form keeps what
    it had, and an empty form falls back to built-in content.
    """

    activity_key: str = ""
    default_count = 3
    has_reflection_toggle = True
    default_show_feedback = True

    def __init__(
        self,
        settings: AppSettings,
        theme: Theme,
        handoff: SessionHandoff,
        generator: ContentGenerator,
    ):
        self.settings = settings
        self.theme = theme
        self.handoff = handoff
        self.generator = generator
        self.info = ACTIVITIES[self.activity_key]

        # Shared form state
        self.source = "manual"
        self.cefr_level = "B1"
        self.guidance = ""
        self.count = self.default_count
        self.show_feedback = self.default_show_feedback
        self.interaction_mode = "pairs"

        # Generation state
        self.generating = False
        self._task: Optional[asyncio.Task] = None
        self.generate_btn = None
        self.cancel_btn = None
        self.spinner = None

        previous = handoff.load_or_none(self.activity_key)
        if previous is not None:
            logger.debug(f"Restoring previous {self.activity_key} setup")
            self.prefill(previous)

    # --- Subclass hooks ---

    def prefill(self, config):
        self.show_feedback = config.show_feedback
        self.interaction_mode = config.interaction_mode

    def render_content(self):
        raise NotImplementedError

    def render_settings(self):
        pass

    def build_config(self):
        raise NotImplementedError

    def apply_generated(self, result: GenerationResult):
        raise NotImplementedError

    def has_content(self) -> bool:
        return False

    def exclusions(self) -> List[str]:
        return []

    # --- Layout ---

    def render(self):
        self.theme.header(self.info.title)
        with ui.column().classes("w-full items-center p-6 gap-6"):
            ui.label(self.info.tagline).classes("text-lg text-gray-500")

            with Theme.card():
                Theme.section_label("Content")
                ui.radio(
                    {"manual": "Write my own", "ai": "Generate with AI"}
                ).props("inline").bind_value(self, "source")
                with ui.column().classes("w-full gap-3").bind_visibility_from(
                    self, "source", value="ai"
                ):
                    self.render_ai_controls()
                self.render_content()

            with Theme.card():
                Theme.section_label("Settings")
                self.render_settings()
                ui.toggle({"pairs": "Pairs", "groups": "Groups"}).bind_value(
                    self, "interaction_mode"
                )
                if self.has_reflection_toggle:
                    ui.switch("Reflection screen at the end").bind_value(self, "show_feedback")

            Theme.primary_button("Start", self.start, icon="play_arrow").classes("w-48")

    def render_ai_controls(self):
        ui.label("Student level").classes("text-sm")
        ui.toggle(CEFR_LEVELS).bind_value(self, "cefr_level")
        ui.input("Optional guidance for the AI").bind_value(self, "guidance").classes("w-full")
        with ui.row().classes("items-center gap-2"):
            self.generate_btn = Theme.primary_button(
                "Generate", self.run_generation, icon="auto_awesome"
            )
            self.cancel_btn = ui.button("Cancel", on_click=self.cancel_generation).props(
                "flat color=red"
            )
            self.spinner = ui.spinner(size="md")
        self._set_generating(False)

    # --- Generation ---

    def build_request(self, count: Optional[int] = None, exclude: Optional[List[str]] = None):
        return GenerationRequest(
            activity=self.activity_key,
            cefr_level=self.cefr_level,
            count=count or self.count,
            guidance=self.guidance,
            exclude=exclude if exclude is not None else self.exclusions(),
        )

    def _set_generating(self, value: bool):
        self.generating = value
        if self.generate_btn is None:
            return
        self.generate_btn.set_enabled(not value)
        self.cancel_btn.set_visibility(value)
        self.spinner.set_visibility(value)

    async def generate(self, request: GenerationRequest) -> Optional[GenerationResult]:
        """Runs one request. Returns None when cancelled or failed (user already told)."""
        if self.generating:
            return None
        self._set_generating(True)
        self._task = asyncio.create_task(self.generator.generate_async(request))
        try:
            return await self._task
        except asyncio.CancelledError:
            logger.info(f"Generation for {self.activity_key} cancelled by user")
            ui.notify("Generation cancelled.")
            return None
        except GenerationError as e:
            logger.warning(f"Generation for {self.activity_key} failed: {e}")
            ui.notify(str(e), type="negative")
            if self.has_content():
                return None
            ui.notify("Using built-in examples instead.", type="info")
            return self.generator.fallback(request)
        finally:
            self._task = None
            self._set_generating(False)

    async def run_generation(self):
        try:
            request = self.build_request()
        except ValidationError as e:
            ui.notify(friendly_error(e), type="warning")
            return
        result = await self.generate(request)
        if result is not None:
            if result.rejected:
                logger.info(f"{result.rejected} generated item(s) were discarded")
            self.apply_generated(result)

    def cancel_generation(self):
        if self._task is not None and not self._task.done():
            self._task.cancel()

    # --- Start ---

    def start(self):
        try:
            config = self.build_config()
        except ValueError as e:
            ui.notify(friendly_error(e), type="warning")
            return
        self.handoff.save(config)
        logger.info(f"Starting {self.activity_key} session")
        ui.navigate.to(self.info.present_path)
