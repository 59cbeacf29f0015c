"""Error taxonomy and the handlers that render it as the response envelope.

Every business-rule failure is an ``ApiError`` raised where it is detected.
Handlers registered on the app turn them, request validation failures and
unexpected exceptions into ``{"error": true, "message": ...}`` bodies.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Error interno del servidor"
INVALID_INPUT_MESSAGE = "Datos de entrada invalidos"


class ApiError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(status_code=self.status_code, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = INVALID_INPUT_MESSAGE


class SelfDeletionForbidden(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No puedes eliminar tu propia cuenta"


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Usuario no autenticado"


class TokenExpired(Unauthenticated):
    default_message = "Token expirado"


class TokenInvalid(Unauthenticated):
    default_message = "Token invalido"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Acceso denegado"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class InternalError(ApiError):
    pass


# Framework-raised errors that carry English details.
_FRAMEWORK_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Ruta no encontrada",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Metodo no permitido",
}


def _envelope(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": True, "message": message}, headers=headers)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        message = exc.message
    else:
        message = _FRAMEWORK_MESSAGES.get(exc.status_code, str(exc.detail))
    headers = getattr(exc, "headers", None)
    if exc.status_code == status.HTTP_401_UNAUTHORIZED and not headers:
        headers = {"WWW-Authenticate": "Bearer"}
    return _envelope(exc.status_code, message, headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return _envelope(status.HTTP_400_BAD_REQUEST, INVALID_INPUT_MESSAGE)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = InternalError()
    return _envelope(error.status_code, error.message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
