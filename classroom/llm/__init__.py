import os

from classroom.llm.llm_connector import LLMConnector, Message


def get_llm_connector(provider: str = None) -> LLMConnector:
    """Builds the connector named by LLM_PROVIDER (GEMINI or OPENAI)."""
    provider = (provider or os.environ.get("LLM_PROVIDER", "GEMINI")).upper()
    if provider == "GEMINI":
        from classroom.llm.gemini_connector import GeminiConnector

        return GeminiConnector()
    elif provider == "OPENAI":
        from classroom.llm.openai_connector import OpenAIConnector

        return OpenAIConnector()
    else:
        raise ValueError(f"Unsupported LLM_PROVIDER: {provider}")


__all__ = ["LLMConnector", "Message", "get_llm_connector"]
