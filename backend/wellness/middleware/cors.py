"""
CORS middleware.
Starlette's CORSMiddleware for the API, skipped on paths that answer CORS
themselves (the chat relay sends fixed headers and its own preflight).
"""
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class SelectiveCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that passes ``exclude_paths`` straight to the app."""

    def __init__(self, app: ASGIApp, exclude_paths: tuple = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exclude_paths = frozenset(exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exclude_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
