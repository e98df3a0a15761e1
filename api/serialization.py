"""
JSON handling that keeps decimal prices exact.

Request bodies are parsed with JSON numbers as ``Decimal`` and responses
write ``Decimal`` values back out as plain JSON numbers.
"""

from typing import Any, Callable, Coroutine

import simplejson
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute


class DecimalJSONResponse(JSONResponse):
    """JSON response that renders Decimal as a numeric literal."""

    def render(self, content: Any) -> bytes:
        return simplejson.dumps(
            content,
            use_decimal=True,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


class DecimalJSONRequest(Request):
    """Request whose JSON body keeps numbers with a fraction as Decimal."""

    async def json(self) -> Any:
        if not hasattr(self, "_json"):
            body = await self.body()
            self._json = simplejson.loads(body, use_decimal=True)
        return self._json


class DecimalJSONRoute(APIRoute):
    """Route that hands its endpoint a DecimalJSONRequest."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def decimal_route_handler(request: Request) -> Response:
            request = DecimalJSONRequest(request.scope, request.receive)
            return await original_route_handler(request)

        return decimal_route_handler
