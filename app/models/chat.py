from __future__ import annotations

from typing import Any, Literal

from google.genai import types
from pydantic import BaseModel, Field, model_validator


class ChatPart(BaseModel):
    text: str


class ChatTurn(BaseModel):
    """One message of a client-held conversation.

    The browser sends ``{"role": ..., "parts": [{"text": ...}]}``; the shorter
    ``{"role": ..., "text": ...}`` is accepted as well.
    """

    role: Literal["user", "model"]
    parts: list[ChatPart] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_text_shorthand(cls, data: Any) -> Any:
        if isinstance(data, dict) and "text" in data and "parts" not in data:
            data = {**data, "parts": [{"text": data["text"]}]}
            data.pop("text")
        return data

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)

    def to_content(self) -> types.Content:
        return types.Content(
            role=self.role,
            parts=[types.Part.from_text(text=part.text) for part in self.parts],
        )


class InterviewRequest(BaseModel):
    history: list[ChatTurn] | None = None
    message: str | None = None


class EnglishTeacherRequest(BaseModel):
    message: str | None = None


class AskRequest(BaseModel):
    question: str | None = None
