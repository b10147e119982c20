from nicegui import ui, app, Client
import logging

from classroom.config import AppSettings
from classroom.generation import ContentGenerator
from classroom.gui.activities import ACTIVITIES
from classroom.gui.pages.activity_setups import SETUP_PAGES
from classroom.gui.pages.present import PresentPage
from classroom.gui.theme import Theme
from classroom.llm import get_llm_connector
from classroom.session import SessionHandoff, SessionLoadError

logger = logging.getLogger(__name__)


def init_gui(settings: AppSettings):
    # 1. Shared services
    app.settings = settings
    app.generator = ContentGenerator(
        timeout=settings.generation_timeout,
        connector_factory=lambda: get_llm_connector(settings.llm_provider),
    )

    @ui.page("/")
    def home_page():
        theme = Theme(app.settings)
        theme.apply()
        theme.header("Speaking Activities")

        with ui.column().classes("w-full items-center p-6 gap-6"):
            ui.label("Choose an activity").classes("slide-title")
            with ui.row().classes("w-full max-w-5xl justify-center gap-6"):
                for info in ACTIVITIES.values():
                    with ui.card().classes("w-72 cursor-pointer items-center p-6 gap-2").on(
                        "click", lambda path=info.setup_path: ui.navigate.to(path)
                    ):
                        ui.icon(info.icon, size="48px").classes(Theme.text_accent)
                        ui.label(info.title).classes("text-xl font-bold")
                        ui.label(info.tagline).classes("text-center " + Theme.text_muted)

    @ui.page("/speaking/{activity}")
    async def setup_page(activity: str, client: Client):
        page_cls = SETUP_PAGES.get(activity)
        if page_cls is None:
            logger.warning(f"Unknown activity '{activity}', redirecting home")
            ui.navigate.to("/")
            return

        # Tab storage needs a live connection
        await client.connected()
        theme = Theme(app.settings)
        theme.apply()
        page = page_cls(app.settings, theme, SessionHandoff(app.storage.tab), app.generator)
        page.render()

    @ui.page("/speaking/{activity}/present")
    async def present_page(activity: str, client: Client):
        if activity not in ACTIVITIES:
            ui.navigate.to("/")
            return

        await client.connected()
        handoff = SessionHandoff(app.storage.tab)
        try:
            config = handoff.load(activity)
        except SessionLoadError as e:
            logger.info(f"No session to present ({e}), back to setup")
            ui.navigate.to(ACTIVITIES[activity].setup_path)
            return

        theme = Theme(app.settings)
        theme.apply()
        PresentPage(config, app.settings, theme, client).render()


def run(settings: AppSettings):
    init_gui(settings)
    ui.run(
        title="Speaking Activities",
        dark=settings.dark_mode,
        port=settings.port,
        reload=False,
    )
