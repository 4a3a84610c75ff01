"""Request ID middleware.

Forwards a safe client X-Request-ID or assigns a new one, exposes it as
``request.state.request_id`` (the error handlers log it) and echoes it on
the response. Raw ASGI so streaming responses and WebSockets pass through
untouched.
"""

import re
import uuid
from typing import Callable

REQUEST_ID_HEADER = "X-Request-ID"
# Alphanumeric, hyphen, underscore only; anything else could forge log lines.
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def request_id_from_scope(scope: dict, header_name: str = REQUEST_ID_HEADER) -> str:
    """Return the client's request id when it is safe to log, else a new uuid4."""
    want = header_name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            candidate = value.decode("latin-1").strip()
            if _SAFE_REQUEST_ID.match(candidate):
                return candidate
            break
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = REQUEST_ID_HEADER) -> Callable:
    """Attach a request id to every HTTP request and its response."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = request_id_from_scope(scope, header_name)
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app
