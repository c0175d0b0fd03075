"""CORS middleware for the browser editor."""

import falcon
import falcon.asgi

_ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
_ALLOWED_HEADERS = "Authorization, Content-Type, Last-Event-ID"


class CORSMiddleware:
    """Echoes allowed origins back and answers OPTIONS preflight requests.

    ``"*"`` in the origin list allows any origin. Requests from other origins
    get no CORS headers and are left to the browser to block.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = set(origins)
        self._allow_any = "*" in self._origins

    def _allowed_origin(self, req: falcon.asgi.Request) -> str | None:
        origin = req.get_header("Origin")
        if not origin:
            return None
        if self._allow_any or origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight requests."""
        if req.method != "OPTIONS":
            return
        origin = self._allowed_origin(req)
        if origin:
            resp.set_header("Access-Control-Allow-Methods", _ALLOWED_METHODS)
            resp.set_header("Access-Control-Allow-Headers", _ALLOWED_HEADERS)
            resp.set_header("Access-Control-Max-Age", "86400")
        resp.status = falcon.HTTP_204
        resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        """Attach origin headers to every response."""
        resp.append_header("Vary", "Origin")
        origin = self._allowed_origin(req)
        if origin:
            resp.set_header("Access-Control-Allow-Origin", origin)
