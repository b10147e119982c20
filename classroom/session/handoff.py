import json
import logging
from typing import MutableMapping, Optional

from pydantic import ValidationError

from classroom.models.session_config import SESSION_CONFIG_ADAPTER, config_type_for

logger = logging.getLogger(__name__)


class SessionLoadError(ValueError):
    """The presentation has nothing valid to show; send the user back to setup."""


def handoff_key(activity: str) -> str:
    return f"classroom.session.{activity}"


class SessionHandoff:
    """
    Passes a SessionConfig from a setup screen to its presentation screen
    through a session-scoped key-value store (NiceGUI's per-tab storage in
    the app, a plain dict in tests). Values are stored as JSON text.
    """

    def __init__(self, store: MutableMapping[str, str]):
        self.store = store

    def save(self, config) -> str:
        key = handoff_key(config.activity)
        self.store[key] = config.model_dump_json()
        logger.debug(f"Stored session config under {key}")
        return key

    def load(self, activity: str):
        key = handoff_key(activity)
        raw = self.store.get(key)
        if raw is None:
            raise SessionLoadError(f"No session configured for {activity}.")

        try:
            config = SESSION_CONFIG_ADAPTER.validate_json(raw)
        except (ValidationError, json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Discarding unreadable session data under {key}: {e}")
            raise SessionLoadError(f"Session data for {activity} is corrupt.") from e

        expected = config_type_for(activity)
        if expected is None or not isinstance(config, expected):
            raise SessionLoadError(
                f"Stored session is for '{config.activity}', not '{activity}'."
            )
        return config

    def load_or_none(self, activity: str) -> Optional[object]:
        """Previous config, used to pre-fill a setup screen when returning to it."""
        try:
            return self.load(activity)
        except SessionLoadError:
            return None

    def clear(self, activity: str):
        self.store.pop(handoff_key(activity), None)
