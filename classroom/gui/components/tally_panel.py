from nicegui import ui

from classroom.core.tally import Tally

OPTION_LABELS = {
    "strongly_agree": "Strongly Agree",
    "agree": "Agree",
    "disagree": "Disagree",
    "strongly_disagree": "Strongly Disagree",
}


def option_label(key: str) -> str:
    return OPTION_LABELS.get(key, key)


class TallyPanel:
    """Counter per option with +/- buttons and a live percentage bar."""

    def __init__(self, tally: Tally, on_increment, on_decrement):
        self.tally = tally
        self.on_increment = on_increment
        self.on_decrement = on_decrement

    def render(self):
        with ui.row().classes("w-full justify-center gap-4"):
            for key in self.tally.options:
                with ui.card().classes("items-center gap-2 min-w-[160px]"):
                    ui.label(option_label(key)).classes("text-lg font-bold")
                    ui.label(str(self.tally.count(key))).classes("text-5xl font-bold")
                    with ui.row().classes("gap-2"):
                        ui.button(icon="remove", on_click=lambda k=key: self.on_decrement(k)).props(
                            "round flat"
                        )
                        ui.button(icon="add", on_click=lambda k=key: self.on_increment(k)).props(
                            "round color=deep-purple"
                        )
                    percentage = self.tally.percentage(key)
                    ui.linear_progress(value=percentage / 100, show_value=False).classes("w-full")
                    ui.label(f"{percentage}%").classes("text-xs text-gray-500")
