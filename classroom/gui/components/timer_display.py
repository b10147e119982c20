from nicegui import ui

from classroom.core.timer import Timer

WARNING_SECONDS = 10


class TimerDisplay:
    """Big clock plus play/pause and reset. Re-renders on every timer change."""

    def __init__(self, timer: Timer, on_toggle, on_reset, warning_seconds: int = WARNING_SECONDS):
        self.timer = timer
        self.on_toggle = on_toggle
        self.on_reset = on_reset
        self.warning_seconds = warning_seconds

        self.clock = None
        self.toggle_btn = None

        self.timer.subscribe(self.refresh)

    def render(self):
        with ui.column().classes("items-center gap-2"):
            self.clock = ui.label(self.timer.display).classes("slide-clock")
            with ui.row().classes("gap-2"):
                self.toggle_btn = ui.button(icon="play_arrow", on_click=self.on_toggle).props(
                    "round color=deep-purple"
                )
                ui.button(icon="restart_alt", on_click=self.on_reset).props("round flat")
        self.refresh()

    def refresh(self):
        if self.clock is None or self.clock.is_deleted:
            return
        self.clock.set_text(self.timer.display)
        remaining = self.timer.seconds_remaining
        urgent = remaining <= self.warning_seconds and self.timer.total_seconds > 0
        if urgent:
            self.clock.classes(add="text-red-500")
        else:
            self.clock.classes(remove="text-red-500")
        self.toggle_btn.props(f"icon={'pause' if self.timer.running else 'play_arrow'}")
