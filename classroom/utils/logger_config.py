import logging
from typing import Optional

# Client libraries that log every HTTP round trip at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "google_genai", "urllib3", "watchfiles")


class EmojiFormatter(logging.Formatter):
    """
    Log formatter that prefixes each line with an emoji for its level,
    so presenter-side logs are easy to scan during a lesson.
    """

    LEVEL_EMOJIS = {
        logging.DEBUG: "🐛",
        logging.INFO: "✅",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "🔥",
    }

    def format(self, record):
        s = super().format(record)
        emoji = self.LEVEL_EMOJIS.get(record.levelno, "")
        return f"{emoji} {s}"


def setup_logging(level: Optional[str] = None):
    """
    Configures the root logger with the EmojiFormatter.
    Call once at the application's entry point.

    Args:
        level: Level name such as "INFO". Defaults to DEBUG.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or "DEBUG").upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        EmojiFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    # Avoid duplicate lines when NiceGUI re-imports the entry module
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
