from nicegui import ui

from classroom.config import AppSettings


class Theme:
    """
    Styling shared by every page. The dark/light flag lives on the injected
    AppSettings, so a toggle on one page carries over to the next.
    """

    text_accent = "text-violet-500"
    text_muted = "text-gray-500"

    # Standard Spacing
    padding = "p-6"
    gap = "gap-6"

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self.dark = None

    def apply(self):
        """Call once per page, before building content."""
        self.dark = ui.dark_mode(self.settings.dark_mode)
        ui.add_head_html("""
            <style>
                .slide-title { font-size: 2.5rem; font-weight: 700; line-height: 1.1; }
                .slide-clock { font-size: 5rem; font-variant-numeric: tabular-nums; font-weight: 700; }
                .slide-quote { font-size: 1.75rem; font-style: italic; }
            </style>
        """)

    def toggle(self):
        value = self.settings.toggle_theme()
        if self.dark is not None:
            self.dark.set_value(value)

    def header(self, title: str, back_to: str = None):
        with ui.header().classes("items-center px-4 h-16 bg-violet-700"):
            ui.button(icon="home", on_click=lambda: ui.navigate.to("/")).props(
                "flat round dense color=white"
            )
            if back_to:
                ui.button(icon="settings", on_click=lambda: ui.navigate.to(back_to)).props(
                    "flat round dense color=white"
                ).tooltip("Back to setup")
            ui.label(title).classes("text-xl font-bold text-white")
            ui.space()
            ui.button(icon="dark_mode", on_click=self.toggle).props(
                "flat round dense color=white"
            ).tooltip("Toggle theme")

    @staticmethod
    def card():
        return ui.card().classes("w-full max-w-3xl mx-auto p-6 gap-4")

    @staticmethod
    def section_label(text: str):
        return ui.label(text).classes("text-sm font-bold uppercase text-gray-500")

    @staticmethod
    def primary_button(text: str, on_click, icon: str = None):
        return ui.button(text, on_click=on_click, icon=icon).props("color=deep-purple unelevated")
