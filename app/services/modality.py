from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Union

from google.genai import types

from app.core.errors import MissingInput


@dataclass(frozen=True)
class ImageUpload:
    mime_type: str
    data: bytes


@dataclass(frozen=True)
class TextPart:
    text: str

    def to_genai(self) -> types.Part:
        return types.Part.from_text(text=self.text)


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    base64_data: str

    def to_genai(self) -> types.Part:
        return types.Part(
            inline_data=types.Blob(
                mime_type=self.mime_type,
                data=base64.b64decode(self.base64_data),
            )
        )


ContentPart = Union[TextPart, ImagePart]


def normalize_request(
    question: str | None = None,
    image: ImageUpload | None = None,
) -> list[ContentPart]:
    """Turn a question and/or uploaded image into ordered content parts.

    The text part always precedes the image part; Gemini reads parts
    positionally.
    """
    has_image = image is not None and bool(image.data)
    if not question and not has_image:
        raise MissingInput("Question or image is required")

    parts: list[ContentPart] = []
    if question:
        parts.append(TextPart(text=question))
    if has_image:
        parts.append(
            ImagePart(
                mime_type=image.mime_type,
                base64_data=base64.b64encode(image.data).decode("ascii"),
            )
        )
    return parts


def normalize_response(
    model_text: str,
    field: str,
    transcription: str | None = None,
) -> dict[str, str]:
    payload: dict[str, str] = {}
    if transcription is not None:
        payload["transcription"] = transcription
    payload[field] = model_text
    return payload
