"""Chat relay service.

Validates a question plus chat history, forwards the conversation to Gemini
and pulls the first candidate's text out of the reply.
"""
import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.schemas.chat import (
    ChatPart,
    ChatReply,
    ChatTurn,
    ConversationRequest,
    ExtractionFailure,
    ExtractionResult,
    GeminiRequest,
    GeminiResponse,
)
from app.services.errors import ExtractionError, ParseError, ValidationError
from app.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_request_body(raw_body: bytes) -> Any:
    """Decode the inbound body as strict JSON. Raises ParseError.

    NaN and Infinity are rejected since they are not valid JSON.
    """
    try:
        return json.loads(raw_body, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(f"JSON parse error: {e}")
        raise ParseError()


def validate_conversation(body: Any) -> ConversationRequest:
    """Check `question` and `chatHistory`. Raises ValidationError."""
    if not isinstance(body, dict):
        body = {}

    question = body.get("question")
    if not question or not isinstance(question, str):
        logger.error("Missing or invalid question field")
        raise ValidationError("Question is required and must be a string")

    chat_history = body.get("chatHistory")
    if not isinstance(chat_history, list):
        logger.error("Invalid chatHistory field")
        raise ValidationError("chatHistory must be an array")

    return ConversationRequest(question=question, chatHistory=chat_history)


def build_payload(conversation: ConversationRequest) -> GeminiRequest:
    """Append the question as a new user turn after the existing history."""
    user_turn = ChatTurn(role="user", parts=(ChatPart(text=conversation.question),))
    return GeminiRequest(
        contents=[*conversation.chat_history, user_turn.model_dump(mode="json")]
    )


def extract_reply_text(data: Any) -> ExtractionResult:
    """Pull `candidates[0].content.parts[0].text` out of a Gemini response."""
    if not isinstance(data, dict):
        return ExtractionResult(failure=ExtractionFailure.MALFORMED_RESPONSE)

    try:
        response = GeminiResponse.model_validate(data)
    except PydanticValidationError:
        return ExtractionResult(failure=ExtractionFailure.MALFORMED_RESPONSE)

    if not response.candidates:
        return ExtractionResult(failure=ExtractionFailure.NO_CANDIDATES)

    content = response.candidates[0].content
    if content is None or content.parts is None:
        return ExtractionResult(failure=ExtractionFailure.INVALID_CONTENT)

    if not content.parts:
        return ExtractionResult(failure=ExtractionFailure.NO_PARTS)

    text = content.parts[0].text
    if not text:
        return ExtractionResult(failure=ExtractionFailure.EMPTY_TEXT)

    return ExtractionResult(text=text)


class ChatRelay:
    """Relays one conversation turn to Gemini and returns the reply text."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def handle(self, raw_body: bytes) -> ChatReply:
        """Process one request body end to end.

        Raises a ChatRelayError subclass for every classified failure.
        """
        body = parse_request_body(raw_body)
        logger.debug(f"Request body: {json.dumps(body, indent=2, ensure_ascii=False)}")

        conversation = validate_conversation(body)
        payload = build_payload(conversation).model_dump(mode="json")
        logger.info(f"Sending {len(payload['contents'])} turns to Gemini API")
        logger.debug(f"Gemini API payload: {json.dumps(payload, indent=2, ensure_ascii=False)}")

        data = await self.client.generate_content(payload)

        result = extract_reply_text(data)
        if not result.ok:
            logger.error(f"Failed to extract text from Gemini response: {result.failure.value}")
            logger.error(f"Gemini response structure: {json.dumps(data, indent=2, ensure_ascii=False)}")
            raise ExtractionError()

        logger.info(f"Extracted response text ({len(result.text)} chars)")
        return ChatReply(text=result.text)
