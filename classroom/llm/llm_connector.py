from abc import ABC, abstractmethod
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Message(BaseModel):
    role: Literal["user", "assistant"] = Field(
        ..., description="Message role: 'user' or 'assistant'."
    )
    content: str


class LLMConnector(ABC):
    @abstractmethod
    def get_text_response(
        self,
        system_prompt: Optional[str],
        chat_history: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 2000,
        json_mode: bool = True,
    ) -> str:
        """
        Makes a single completion call and returns the raw text.

        With json_mode the provider is asked for a JSON body, but callers
        still validate the text: not every backend honours the flag.
        """
        pass
