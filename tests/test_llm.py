import pytest

from classroom.llm import get_llm_connector
from classroom.llm.gemini_connector import GeminiConnector
from classroom.llm.openai_connector import OpenAIConnector


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unsupported LLM_PROVIDER"):
        get_llm_connector("llama")


def test_gemini_needs_an_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        get_llm_connector("gemini")


def test_openai_needs_base_url_key_and_model(monkeypatch):
    monkeypatch.setenv("OPENAI_API_BASE_URL", "http://localhost:8000/v1")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("OPENAI_API_MODEL", raising=False)
    with pytest.raises(ValueError, match="OPENAI_API_MODEL"):
        OpenAIConnector()


def test_provider_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_BASE_URL", "http://localhost:8000/v1")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_API_MODEL", "local-model")

    connector = get_llm_connector()

    assert isinstance(connector, OpenAIConnector)
    assert connector.model == "local-model"


def test_gemini_model_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("GEMINI_API_MODEL", raising=False)

    connector = GeminiConnector()

    assert connector.model_name == "gemini-flash-latest"
    assert len(connector.default_safety_settings) == 4
