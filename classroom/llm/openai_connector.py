import logging
import os
from typing import Any, Dict, List, Optional

import openai

from classroom.llm.llm_connector import LLMConnector, Message

logger = logging.getLogger(__name__)


class OpenAIConnector(LLMConnector):
    """
    Chat Completions connector. Works against OpenAI and any compatible
    server (llama.cpp, vLLM, LM Studio) through OPENAI_API_BASE_URL.
    """

    def __init__(self):
        self.base_url = os.environ.get("OPENAI_API_BASE_URL")
        self.api_key = os.environ.get("OPENAI_API_KEY")
        self.model = os.environ.get("OPENAI_API_MODEL")
        if not self.base_url:
            logger.error("OPENAI_API_BASE_URL environment variable not set.")
            raise ValueError("OPENAI_API_BASE_URL environment variable not set.")
        if not self.api_key:
            logger.error("OPENAI_API_KEY environment variable not set.")
            raise ValueError("OPENAI_API_KEY environment variable not set.")
        if not self.model:
            logger.error("OPENAI_API_MODEL environment variable not set.")
            raise ValueError("OPENAI_API_MODEL environment variable not set.")
        self.client = openai.OpenAI(base_url=self.base_url, api_key=self.api_key)

    def _build_messages(
        self, system_prompt: Optional[str], chat_history: List[Message]
    ) -> List[Dict[str, Any]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.extend({"role": m.role, "content": m.content} for m in chat_history)
        return messages

    def get_text_response(
        self,
        system_prompt: Optional[str],
        chat_history: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
        json_mode: bool = True,
    ) -> str:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(system_prompt, chat_history),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        resp = self.client.chat.completions.create(**kwargs)

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            logger.error(f"OpenAI returned no content: {resp}")
            raise ValueError("OpenAI returned empty response.")
        return content
