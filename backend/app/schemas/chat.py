from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatPart(BaseModel):
    """A single text part of a chat turn."""

    model_config = ConfigDict(frozen=True)

    text: str


class ChatTurn(BaseModel):
    """One role-tagged utterance in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str
    parts: tuple[ChatPart, ...]


class ConversationRequest(BaseModel):
    """Validated inbound request body.

    History turns are kept exactly as the client sent them.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str
    chat_history: list[Any] = Field(alias="chatHistory")


class GeminiRequest(BaseModel):
    """Payload sent to the generateContent endpoint."""

    contents: list[Any]


# Upstream response shape. Every level is optional so each missing field
# can be reported on its own.
class GeminiPart(BaseModel):
    text: str | None = None


class GeminiContent(BaseModel):
    parts: list[GeminiPart] | None = None


class GeminiCandidate(BaseModel):
    content: GeminiContent | None = None


class GeminiResponse(BaseModel):
    candidates: list[GeminiCandidate] | None = None


class ExtractionFailure(str, Enum):
    MALFORMED_RESPONSE = "malformed_response"
    NO_CANDIDATES = "no_candidates"
    INVALID_CONTENT = "invalid_content"
    NO_PARTS = "no_parts"
    EMPTY_TEXT = "empty_text"


class ExtractionResult(BaseModel):
    """Outcome of pulling the reply text out of an upstream response."""

    text: str | None = None
    failure: ExtractionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class ChatReply(BaseModel):
    text: str


class ErrorReply(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
    message: str = "Chat API is running"
