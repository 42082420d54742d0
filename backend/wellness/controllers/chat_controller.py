"""
Chat relay controller.

Forwards a conversation to the hosted LLM gateway with the health assistant
system prompt prepended, and streams the gateway's response back unchanged.
"""
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from fastapi import Response, status
from fastapi.responses import JSONResponse, StreamingResponse

from wellness.api.models.chat import ChatRequest
from wellness.config.settings import Settings
from wellness.services.prompts import build_system_prompt

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

RATE_LIMITED_MESSAGE = "Rate limits exceeded"
PAYMENT_REQUIRED_MESSAGE = "Payment required"
GATEWAY_ERROR_MESSAGE = "AI gateway error"


class GatewayConfigurationError(Exception):
    """Raised when the gateway credential is missing."""


def relay_error(status_code: int, message: str) -> JSONResponse:
    """JSON error body with the relay's CORS headers."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=CORS_HEADERS,
    )


class ChatRelayController:
    """Controller for the chat relay."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Application settings holding the gateway configuration
            transport: Optional httpx transport for the upstream client
        """
        self.settings = settings
        self.transport = transport

    def build_messages(self, request: ChatRequest) -> List[Dict[str, Any]]:
        """System prompt first, then the caller's messages in their original order."""
        user_info = request.user_info
        system_prompt = build_system_prompt(
            username=user_info.username if user_info else None,
            email=user_info.email if user_info else None,
        )
        return [
            {"role": "system", "content": system_prompt},
            *(message.model_dump() for message in request.messages),
        ]

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        return {
            "model": self.settings.ai_gateway_model,
            "messages": self.build_messages(request),
            "stream": True,
        }

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self.transport,
            timeout=httpx.Timeout(self.settings.ai_gateway_timeout),
        )

    async def relay(self, request: ChatRequest) -> Response:
        """
        Forward a chat request to the gateway and relay its response.

        Makes a single attempt. Upstream 429 and 402 are passed on with fixed
        bodies; any other non-success status becomes a generic 500.

        Raises:
            GatewayConfigurationError: If AI_GATEWAY_API_KEY is empty
            httpx.HTTPError: If the gateway cannot be reached
        """
        api_key = self.settings.ai_gateway_api_key
        if not api_key:
            raise GatewayConfigurationError("AI_GATEWAY_API_KEY is not configured")

        username = request.user_info.username if request.user_info else None
        logger.info(
            "Processing chat request with %d messages for user: %s",
            len(request.messages),
            username,
        )

        client = self._create_client()
        try:
            upstream_request = client.build_request(
                "POST",
                self.settings.ai_gateway_url,
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
                json=self.build_payload(request),
            )
            upstream = await client.send(upstream_request, stream=True)
        except BaseException:
            await client.aclose()
            raise

        if not upstream.is_success:
            try:
                error_text = (await upstream.aread()).decode("utf-8", errors="replace")
            finally:
                await upstream.aclose()
                await client.aclose()
            logger.error("AI gateway error: %s %s", upstream.status_code, error_text)

            if upstream.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
                return relay_error(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED_MESSAGE)
            if upstream.status_code == status.HTTP_402_PAYMENT_REQUIRED:
                return relay_error(status.HTTP_402_PAYMENT_REQUIRED, PAYMENT_REQUIRED_MESSAGE)
            return relay_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GATEWAY_ERROR_MESSAGE)

        return StreamingResponse(
            self._stream_upstream(client, upstream),
            status_code=status.HTTP_200_OK,
            headers={**CORS_HEADERS, "Content-Type": "text/event-stream"},
        )

    async def _stream_upstream(
        self, client: httpx.AsyncClient, upstream: httpx.Response
    ) -> AsyncIterator[bytes]:
        """
        Yield the upstream body as it arrives.

        Headers are already sent when this runs, so a broken upstream stream
        is logged and the relayed stream simply ends.
        """
        try:
            async for chunk in upstream.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            logger.error(f"AI gateway stream interrupted: {e}")
        finally:
            await upstream.aclose()
            await client.aclose()
