"""Erros da API.

Cada erro conhece o status HTTP e a mensagem que vai no campo ``error`` da
resposta. Os handlers registrados em ``fastroute.main`` fazem a serialização.
"""
from __future__ import annotations

from typing import Any


class ApiError(Exception):
    status_code: int = 500
    message: str = "Erro interno do servidor"

    def __init__(self, message: str | None = None, details: Any = None,
                 status_code: int | None = None):
        self.message = message or self.message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_body(self, include_details: bool = True) -> dict:
        body: dict[str, Any] = {"error": self.message}
        if include_details and self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(ApiError):
    status_code = 400
    message = "Dados inválidos"


class AuthenticationRequired(ApiError):
    status_code = 401
    message = "Token de acesso requerido"


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Email ou senha incorretos"


class InvalidToken(ApiError):
    # 403 no gate das rotas protegidas; /auth/verify usa 401
    status_code = 403
    message = "Token inválido ou expirado"


class NotFound(ApiError):
    status_code = 404
    message = "Recurso não encontrado"


class Conflict(ApiError):
    status_code = 409
    message = "Registro já cadastrado"


class InternalError(ApiError):
    status_code = 500
    message = "Erro interno do servidor"
