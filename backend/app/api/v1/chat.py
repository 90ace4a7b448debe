"""Chat relay endpoint.

POST forwards a question plus chat history to Gemini and returns the
generated text. OPTIONS answers CORS preflight probes.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.api.middleware import CORS_HEADERS
from app.config import get_settings
from app.schemas.chat import ChatReply, ErrorReply
from app.services.chat_relay import ChatRelay
from app.services.errors import ChatRelayError, InternalError
from app.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)
router = APIRouter()


def get_chat_relay() -> ChatRelay:
    """Build the relay from current settings. Overridden in tests."""
    return ChatRelay(GeminiClient(get_settings()))


def error_response(error: ChatRelayError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorReply(error=error.message).model_dump(),
    )


@router.post(
    "",
    response_model=ChatReply,
    responses={
        400: {"model": ErrorReply},
        500: {"model": ErrorReply},
        502: {"model": ErrorReply},
    },
)
async def relay_chat(
    request: Request,
    relay: ChatRelay = Depends(get_chat_relay),
):
    """Relay a chat turn to Gemini and return the reply text."""
    logger.info("Chat API called")

    try:
        raw_body = await request.body()
        reply = await relay.handle(raw_body)
    except ChatRelayError as e:
        return error_response(e)
    except Exception:
        logger.exception("Unexpected error while relaying chat")
        return error_response(InternalError())

    logger.info("Sending success response")
    return JSONResponse(status_code=200, content=reply.model_dump())


@router.options("")
async def preflight():
    """CORS preflight."""
    return Response(status_code=200, headers=CORS_HEADERS)
