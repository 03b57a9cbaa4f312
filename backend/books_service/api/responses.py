"""Response envelope and the response class that applies the identifier codec."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from books_service.core.identifiers import to_wire


class WireJSONResponse(JSONResponse):
    """JSON response with every 64-bit identifier rendered as a decimal string."""

    def render(self, content: Any) -> bytes:
        return super().render(jsonable_encoder(to_wire(content)))


def ok(message: str, data: Any = None) -> dict[str, Any]:
    """Success envelope: ``{success, message, data}``."""
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


def failure(message: str, **extra: Any) -> dict[str, Any]:
    """Error envelope: ``{success: false, message, ...}``."""
    return {"success": False, "message": message, **extra}
