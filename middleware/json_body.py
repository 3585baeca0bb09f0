# backend/middleware/json_body.py
"""Parseo de cuerpos JSON antes de llegar a cualquier ruta.

Si la petición trae Content-Type application/json el cuerpo queda en
request.state.json; un JSON mal formado se corta aquí con 400.
"""
import json
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("middleware.json_body")


class JSONBodyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request.state.json = None
        content_type = request.headers.get("content-type", "")
        if content_type.split(";", 1)[0].strip().lower() == "application/json":
            body = await request.body()
            if body:
                try:
                    request.state.json = json.loads(body)
                except ValueError as e:
                    logger.warning(f"⚠️ JSON inválido en {request.method} {request.url.path}: {e}")
                    return JSONResponse(status_code=400, content={"detail": "Invalid JSON body"})
        return await call_next(request)
