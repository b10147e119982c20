from classroom.config import AppSettings
from classroom.gui.main import run
from classroom.utils.logger_config import setup_logging
from dotenv import load_dotenv

# Allow __mp_main__ for NiceGUI reload/multiprocessing on Windows
if __name__ in {"__main__", "__mp_main__"}:
    load_dotenv()
    settings = AppSettings.from_env()
    setup_logging(settings.log_level)
    run(settings)
