import logging

import pytest
from pydantic import ValidationError

from classroom.config import AppSettings
from classroom.models.session_config import (
    SESSION_CONFIG_ADAPTER,
    AgreeDisagreeConfig,
    ChoiceSet,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    ThisOrThatConfig,
    clamp_round_minutes,
    preset_rounds,
)
from classroom.utils.logger_config import EmojiFormatter, setup_logging

ENV_VARS = [
    "LLM_PROVIDER",
    "GENERATION_TIMEOUT",
    "THINKING_SECONDS",
    "CLASSROOM_DARK_MODE",
    "LOG_LEVEL",
    "CLASSROOM_PORT",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# --- App settings ---


def test_settings_defaults(clean_env):
    settings = AppSettings.from_env()

    assert settings.llm_provider == "GEMINI"
    assert settings.generation_timeout == 60
    assert settings.thinking_seconds == 30
    assert settings.dark_mode is True
    assert settings.port == 8080


def test_settings_from_environment(clean_env):
    clean_env.setenv("LLM_PROVIDER", "openai")
    clean_env.setenv("GENERATION_TIMEOUT", "15")
    clean_env.setenv("THINKING_SECONDS", "45")
    clean_env.setenv("CLASSROOM_DARK_MODE", "false")

    settings = AppSettings.from_env()

    assert settings.llm_provider == "OPENAI"
    assert settings.generation_timeout == 15
    assert settings.thinking_seconds == 45
    assert settings.dark_mode is False


def test_settings_reject_bad_provider(clean_env):
    clean_env.setenv("LLM_PROVIDER", "llama")
    with pytest.raises(ValidationError):
        AppSettings.from_env()


def test_toggle_theme():
    settings = AppSettings(dark_mode=True)
    assert settings.toggle_theme() is False
    assert settings.dark_mode is False


# --- Session configs ---


@pytest.mark.parametrize("value, expected", [(0, 1), (1, 1), (4, 4), (6, 6), (9, 6)])
def test_round_minutes_are_clamped(value, expected):
    assert clamp_round_minutes(value) == expected


def test_round_presets():
    assert preset_rounds(2) == [3, 2]
    assert preset_rounds(3) == [4, 3, 2]
    assert preset_rounds(4) == [4, 3, 2, 1]
    with pytest.raises(ValueError):
        preset_rounds(7)


def test_preset_is_a_copy():
    rounds = preset_rounds(3)
    rounds[0] = 99
    assert preset_rounds(3) == [4, 3, 2]


def test_four_three_two_validation():
    config = FourThreeTwoConfig(prompt="Topic", rounds=[4, 3, 2])
    assert config.round_seconds(1) == 180

    with pytest.raises(ValidationError):
        FourThreeTwoConfig(prompt="Topic", rounds=[])
    with pytest.raises(ValidationError):
        FourThreeTwoConfig(prompt="Topic", rounds=[3, -1])
    with pytest.raises(ValidationError):
        FourThreeTwoConfig(prompt="Topic", rounds=[4, 0])
    with pytest.raises(ValidationError):
        FourThreeTwoConfig(prompt="Topic", rounds=[7, 3])
    with pytest.raises(ValidationError):
        FourThreeTwoConfig(prompt="", rounds=[3])


def test_configs_are_frozen():
    config = AgreeDisagreeConfig(statement="Tea is better than coffee.")
    with pytest.raises(ValidationError):
        config.statement = "Changed"


def test_activity_defaults():
    assert QuestionCardsConfig.model_fields["show_feedback"].default is False
    assert ThisOrThatConfig.model_fields["auto_start_timer"].default is True
    assert ThisOrThatConfig.model_fields["display_mode"].default == "set_by_set"
    assert ThisOrThatConfig.model_fields["start_timer_on_input"].default is False
    assert ThisOrThatConfig.supports_previous is True
    assert FourThreeTwoConfig.supports_previous is False


def test_tally_options_follow_scale():
    simple = AgreeDisagreeConfig(statement="S", scale="simple")
    extended = AgreeDisagreeConfig(statement="S", scale="extended")

    assert simple.tally_options == ["agree", "disagree"]
    assert extended.tally_options == ["strongly_agree", "agree", "disagree", "strongly_disagree"]


def test_choice_sets_need_two_to_four_options():
    with pytest.raises(ValidationError):
        ChoiceSet(options=["Only"])
    with pytest.raises(ValidationError):
        ChoiceSet(options=["a", "b", "c", "d", "e"])


def test_choice_set_options_must_differ():
    with pytest.raises(ValidationError, match="must be different"):
        ChoiceSet(options=["Tea", "Tea"])
    with pytest.raises(ValidationError):
        ChoiceSet(options=["Tea", "Coffee", " tea "])


def test_discriminated_union_picks_the_right_model():
    config = SESSION_CONFIG_ADAPTER.validate_python(
        {"activity": "four_three_two", "prompt": "Topic", "rounds": [3, 2]}
    )
    assert isinstance(config, FourThreeTwoConfig)


# --- Logging ---


def test_emoji_formatter_prefixes_level():
    formatter = EmojiFormatter("%(message)s")
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    assert formatter.format(record).startswith("⚠️")


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_quiets_http_clients(restore_root_logger):
    setup_logging("INFO")
    assert len(restore_root_logger.handlers) == 1
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
