"""
AI chat relay endpoints.

Relays a health-assistant conversation to the LLM gateway and streams the
completion back as server-sent events.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response, status

from wellness.api.models import ChatRequest, RelayErrorResponse
from wellness.config.settings import Settings, get_settings
from wellness.controllers.chat_controller import (
    CORS_HEADERS,
    ChatRelayController,
    relay_error,
)

logger = logging.getLogger(__name__)

RELAY_PATH = "/ai-chat"

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_relay_controller(
    settings: Settings = Depends(get_settings),
) -> ChatRelayController:
    """Dependency injection for ChatRelayController."""
    return ChatRelayController(settings)


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.options(RELAY_PATH, status_code=status.HTTP_200_OK)
async def ai_chat_preflight() -> Response:
    """CORS preflight for the chat relay."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    RELAY_PATH,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"content": {"text/event-stream": {}}, "description": "Relayed completion stream"},
        402: {"model": RelayErrorResponse, "description": "Payment required"},
        429: {"model": RelayErrorResponse, "description": "Rate limits exceeded"},
        500: {"model": RelayErrorResponse, "description": "Relay or gateway failure"},
    },
)
async def ai_chat(
    request: Request,
    controller: ChatRelayController = Depends(get_chat_relay_controller),
) -> Response:
    """
    Stream a health-assistant completion for the given conversation.

    Body: ``{"messages": [{"role", "content"}, ...], "userInfo": {"username", "email"}}``.
    Any failure before streaming starts, malformed input included, is
    answered with 500 and ``{"error": <message>}``.
    """
    try:
        chat_request = ChatRequest.model_validate_json(await request.body())
        return await controller.relay(chat_request)
    except Exception as e:
        logger.error(f"Chat error: {e}", exc_info=True)
        return relay_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
