"""
Errores de aplicación y handlers globales para respuestas JSON consistentes.

Jerarquía:
    AppError
    ├── ValidationError      -> 400
    ├── ConflictError        -> 400 (email ya registrado y verificado)
    ├── AuthError            -> 401
    │   ├── MissingTokenError    -> 401
    │   ├── InvalidTokenError    -> 403
    │   └── UserNotFoundError    -> 401
    ├── NotFoundError        -> 404
    ├── DependencyError      -> 500 (Mongo, SMTP, configuración)
    │   └── EmailDeliveryError
    └── NotImplementedFlowError -> 501 (callback de Google)
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hdnotes.core.config import settings


class AppError(Exception):
    status_code = 500
    default_message = "Something went wrong!"

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        self.message = message or self.default_message
        # `detail` nunca se expone en producción
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_message = "User already exists with this email"


class AuthError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class MissingTokenError(AuthError):
    default_message = "Access token required"


class InvalidTokenError(AuthError):
    status_code = 403
    default_message = "Invalid or expired token"


class UserNotFoundError(AuthError):
    default_message = "Invalid token"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class DependencyError(AppError):
    status_code = 500
    default_message = "Service unavailable"


class EmailDeliveryError(DependencyError):
    default_message = "Failed to send email"


class NotImplementedFlowError(AppError):
    status_code = 501
    default_message = "Not implemented"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(message: str, **extra: Any) -> Dict[str, Any]:
    # El request id viaja en la cabecera X-Request-Id, no en el cuerpo
    body: Dict[str, Any] = {"message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("hdnotes.errors")

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            log.error("%s request_id=%s detail=%s", exc.message, _req_id(request), exc.detail)
        error = None if settings.is_production else exc.detail
        return JSONResponse(status_code=exc.status_code, content=_body(exc.message, error=error))

    @app.exception_handler(PyMongoError)
    async def _mongo_handler(request: Request, exc: PyMongoError):
        log.exception("Error de Mongo request_id=%s", _req_id(request))
        error = None if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=_body("Database unavailable", error=error))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = "Route not found"
        else:
            message = exc.detail or "HTTP error"
        return JSONResponse(status_code=exc.status_code, content=_body(message), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
        return JSONResponse(status_code=400, content=_body("Validation error", errors=errors))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        error = "Internal server error" if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=_body("Something went wrong!", error=error))
