"""
Request Body Limit
==================

ASGI middleware that enforces the maximum request body size.

The limit is checked against ``Content-Length`` when the header is present
and against the bytes actually received otherwise, so chunked uploads are
covered as well.
"""

from typing import List, Optional

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from carousel_renderer.config.logging import get_logger
from carousel_renderer.models.schemas import ErrorResponse

logger = get_logger(__name__)


class BodySizeLimitMiddleware:
    """Reject requests whose body exceeds ``max_body_size`` bytes with a 413."""

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = self._content_length(scope)
        if content_length is not None and content_length > self.max_body_size:
            await self._reject(scope, receive, send, content_length)
            return

        # The body is buffered before the app runs; downstream reads it in full anyway.
        messages: List[Message] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_size:
                await self._reject(scope, receive, send, received)
                return
            more_body = message.get("more_body", False)

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    def _content_length(scope: Scope) -> Optional[int]:
        for name, value in scope.get("headers", []):
            if name == b"content-length":
                try:
                    return int(value)
                except ValueError:
                    return None
        return None

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        logger.warning("Request body too large", received=size, limit=self.max_body_size)
        error_response = ErrorResponse(
            error="Payload too large",
            message=f"Request body exceeds {self.max_body_size} bytes",
        )
        response = JSONResponse(
            status_code=413, content=error_response.model_dump(exclude_none=True)
        )
        await response(scope, receive, send)
