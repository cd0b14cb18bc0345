# fastroute/core/crypto.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from jwt import InvalidTokenError

from fastroute.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt só considera os primeiros 72 bytes da senha
BCRYPT_MAX_BYTES = 72
MIN_PASSWORD_LENGTH = 6


class PasswordHasher:
    """Hash e verificação de senhas com bcrypt (salt embutido no hash)."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @staticmethod
    def _to_bytes(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._to_bytes(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(self._to_bytes(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # hash armazenado com formato inválido
            logger.warning("Hash de senha com formato inválido")
            return False


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    nome: str


@dataclass(frozen=True)
class TokenCheck:
    """Resultado de ``TokenService.validate``: claims ou motivo da falha."""

    valid: bool
    claims: TokenClaims | None = None
    reason: str | None = None


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256",
                 expires_in: timedelta = timedelta(hours=24)):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, email: str, nome: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "nome": nome,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenCheck:
        """
        Verifica assinatura e expiração. Não consulta o banco: usuário
        desativado continua com token válido até o ``exp``.
        """
        try:
            data = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except InvalidTokenError as e:
            return TokenCheck(valid=False, reason=str(e))

        user_id = data.get("userId")
        if user_id is None or "email" not in data:
            return TokenCheck(valid=False, reason="missing-claims")

        claims = TokenClaims(user_id=user_id, email=data["email"], nome=data.get("nome", ""))
        return TokenCheck(valid=True, claims=claims)


def build_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def build_token_service() -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_alg,
        expires_in=timedelta(hours=settings.token_ttl_hours),
    )
