"""
Middlewares de aplicación: request id, logging por petición, rate limit, OPTIONS y CORS.
"""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from hdnotes.core import rate_limit
from hdnotes.core.config import settings


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex
        request.state.request_id = rid
        response = await call_next(request)
        response.headers["X-Request-Id"] = rid
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("hdnotes.request")

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 0
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            dt_ms = int((time.perf_counter() - start) * 1000)
            rid = getattr(request.state, "request_id", None)
            self.log.info(
                "method=%s path=%s status=%s latency_ms=%s request_id=%s",
                request.method, request.url.path, status, dt_ms, rid,
            )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Límite global por IP en ventana deslizante (ver `core.rate_limit`)."""

    async def dispatch(self, request: Request, call_next):
        ip = request.client.host if request.client else ""
        allowed = rate_limit.allow_ip(
            ip,
            limit=settings.effective_rate_limit,
            window_seconds=settings.rate_limit_window_seconds,
        )
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"message": "Too many requests from this IP, please try again later."},
            )
        return await call_next(request)


class OptionsMiddleware(BaseHTTPMiddleware):
    """Responde 200 sin cuerpo a cualquier OPTIONS que no sea un preflight CORS."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return await call_next(request)


def add_middlewares(app: FastAPI) -> None:
    # Starlette envuelve en orden inverso: el último agregado es el más externo.
    # CORS queda por fuera de OPTIONS y rate limit para que sus respuestas lleven cabeceras.
    app.add_middleware(OptionsMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(LoggingMiddleware)
