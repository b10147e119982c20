import logging
import os
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class AppSettings(BaseModel):
    """
    Application-wide settings, read once from the environment at startup
    and passed to every page. Holds the theme flag so pages never read
    browser storage for it on their own.
    """

    llm_provider: Literal["GEMINI", "OPENAI"] = Field(
        "GEMINI", description="Which LLM connector the content generator uses."
    )
    generation_timeout: float = Field(
        60.0, gt=0, description="Seconds before an in-flight generation is abandoned."
    )
    thinking_seconds: int = Field(
        30, ge=0, description="Length of the automatic thinking countdown."
    )
    dark_mode: bool = Field(True, description="Current theme; toggled from any page.")
    log_level: str = "DEBUG"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "AppSettings":
        settings = cls(
            llm_provider=os.environ.get("LLM_PROVIDER", "GEMINI").upper(),
            generation_timeout=float(os.environ.get("GENERATION_TIMEOUT", "60")),
            thinking_seconds=int(os.environ.get("THINKING_SECONDS", "30")),
            dark_mode=_env_bool("CLASSROOM_DARK_MODE", True),
            log_level=os.environ.get("LOG_LEVEL", "DEBUG"),
            port=int(os.environ.get("CLASSROOM_PORT", "8080")),
        )
        logger.debug(f"Loaded settings: {settings.model_dump()}")
        return settings

    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode
