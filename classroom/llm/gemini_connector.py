import logging
import os
from typing import List, Optional

from google import genai
from google.genai import types

from classroom.llm.llm_connector import LLMConnector, Message

logger = logging.getLogger(__name__)


class GeminiConnector(LLMConnector):
    def __init__(self):
        api_key = os.environ.get("GEMINI_API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set.")

        self.model_name = os.environ.get("GEMINI_API_MODEL") or "gemini-flash-latest"
        self.client = genai.Client(api_key=api_key)
        # Classroom content only; keep Gemini's default thresholds tight
        self.default_safety_settings = [
            types.SafetySetting(
                category=category,
                threshold="BLOCK_MEDIUM_AND_ABOVE",
            )
            for category in (
                "HARM_CATEGORY_HARASSMENT",
                "HARM_CATEGORY_HATE_SPEECH",
                "HARM_CATEGORY_SEXUALLY_EXPLICIT",
                "HARM_CATEGORY_DANGEROUS_CONTENT",
            )
        ]

    def _convert_chat_history_to_contents(
        self, chat_history: List[Message]
    ) -> List[types.Content]:
        contents = []
        for msg in chat_history:
            role = "model" if msg.role == "assistant" else "user"
            contents.append(
                types.Content(role=role, parts=[types.Part.from_text(text=msg.content)])
            )
        if not contents:
            contents.append(
                types.Content(role="user", parts=[types.Part.from_text(text="Please proceed.")])
            )
        return contents

    def get_text_response(
        self,
        system_prompt: Optional[str],
        chat_history: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
        json_mode: bool = True,
    ) -> str:
        config = {
            "temperature": temperature,
            "max_output_tokens": max_tokens,
            "safety_settings": self.default_safety_settings,
        }
        if system_prompt:
            config["system_instruction"] = [types.Part.from_text(text=system_prompt)]
        if json_mode:
            config["response_mime_type"] = "application/json"

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=self._convert_chat_history_to_contents(chat_history),
            config=types.GenerateContentConfig(**config),
        )

        if not response.text:
            logger.error(f"Gemini returned no text. Candidates: {response.candidates}")
            raise ValueError("Gemini returned empty response (blocked or error).")
        return response.text
