"""
Excepciones de dominio.

Los servicios lanzan estas excepciones; la capa HTTP las traduce a
respuestas JSON mediante los handlers de ``register_exception_handlers``.

    from mhsurvey.core.exceptions import NotFoundError

    if not company:
        raise NotFoundError("Empresa não encontrada")
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MentalHealthError(Exception):
    """Base de todos los errores del proyecto"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "code": self.code,
            "details": self.details,
        }


# -------- no encontrado --------
class NotFoundError(MentalHealthError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Registro não encontrado"):
        super().__init__(message, code="NOT_FOUND")


# -------- validación (siempre antes de mutar) --------
class ValidationError(MentalHealthError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)

    @classmethod
    def from_pydantic(cls, exc, message: str = "Dados inválidos") -> "ValidationError":
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return cls(message, details={"errors": errors})


# -------- autenticación / autorización --------
class AuthenticationError(MentalHealthError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Não autenticado", code: str = "AUTH_FAILED"):
        super().__init__(message, code=code)


class InvalidCredentialsError(AuthenticationError):
    """Email o contraseña no coinciden con ninguna cuenta"""

    def __init__(self):
        super().__init__("Credenciais inválidas", code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Token inválido"):
        super().__init__(message, code="INVALID_TOKEN")


class AuthorizationError(MentalHealthError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Acesso negado", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="NOT_AUTHORIZED", details=details)


async def domain_exception_handler(request: Request, exc: MentalHealthError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Erro de domínio em %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # payload mal formado: misma forma que ValidationError
    error = ValidationError.from_pydantic(exc, "Dados inválidos")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Exceção não tratada em %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno do servidor", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MentalHealthError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
