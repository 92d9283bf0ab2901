"""Response emitters used by the RPC route runner."""

from __future__ import annotations

import json
from typing import Any, Protocol

from starlette.responses import Response

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


class ResponseEmitter(Protocol):
    """Minimal response surface the route runner writes to."""

    def set_status(self, code: int) -> "ResponseEmitter": ...

    def send_json(self, value: Any) -> None: ...

    def send_empty(self) -> None: ...

    def send_raw(self, text: str) -> None: ...


class BufferedResponse:
    """Collects a single response and renders it for Starlette/FastAPI."""

    def __init__(self) -> None:
        self.status_code = 200
        self.content: bytes = b""
        self.media_type: str | None = None
        self.sent = False

    def set_status(self, code: int) -> "BufferedResponse":
        self.status_code = int(code)
        return self

    def send_json(self, value: Any) -> None:
        # Encode eagerly so serialization errors surface inside the route runner.
        encoded = json.dumps(value, ensure_ascii=False, allow_nan=False).encode("utf-8")
        self._finish(encoded, JSON_MEDIA_TYPE)

    def send_empty(self) -> None:
        self._finish(b"", None)

    def send_raw(self, text: str) -> None:
        self._finish(text.encode("utf-8"), TEXT_MEDIA_TYPE)

    def json(self) -> Any:
        if not self.content:
            return None
        return json.loads(self.content)

    def text(self) -> str:
        return self.content.decode("utf-8")

    def to_starlette(self) -> Response:
        return Response(content=self.content, status_code=self.status_code, media_type=self.media_type)

    def _finish(self, content: bytes, media_type: str | None) -> None:
        if self.sent:
            raise RuntimeError("response already sent")
        self.content = content
        self.media_type = media_type
        self.sent = True
