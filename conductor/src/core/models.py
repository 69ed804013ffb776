"""
Conductor - Domain & Wire Models
=================================
Pydantic models for the two JSON boundaries of the service:

``AIAssistRequest`` / ``AIAssistResponse`` / ``ErrorResponse``
    Inbound and outbound bodies of ``POST /ai-assist``.

``GeminiRequest`` / ``GeminiResponse``
    Request and reply shapes of the Gemini ``generateContent`` REST call.
    Only the fields the service reads are declared; everything else the
    API returns (``finishReason``, ``usageMetadata``, ...) is ignored.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Command(str, Enum):
    """Operation names accepted by ``POST /ai-assist``."""

    SUMMARIZE = "summarize"
    ASK_QUESTION = "ask-question"


# ══════════════════════════════════════════════════════════════════════
#  HTTP API BODIES
# ══════════════════════════════════════════════════════════════════════


class AIAssistRequest(BaseModel):
    # Plain str: unknown commands are rejected by AIService,
    # not by request validation.
    command: str
    text: str


class AIAssistResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str


# ══════════════════════════════════════════════════════════════════════
#  GEMINI WIRE FORMAT
# ══════════════════════════════════════════════════════════════════════


class Part(BaseModel):
    text: str


class Content(BaseModel):
    parts: list[Part]


class GeminiRequest(BaseModel):
    contents: list[Content]

    @classmethod
    def from_prompt(cls, prompt: str) -> GeminiRequest:
        """Single content block holding a single text part."""
        return cls(contents=[Content(parts=[Part(text=prompt)])])


class _Reply(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ContentResponse(_Reply):
    parts: list[Part]


class Candidate(_Reply):
    content: ContentResponse


class GeminiResponse(_Reply):
    candidates: list[Candidate]

    def first_text(self) -> str | None:
        """Text of the first candidate's first part, or None if either list is empty."""
        if not self.candidates or not self.candidates[0].content.parts:
            return None
        return self.candidates[0].content.parts[0].text
