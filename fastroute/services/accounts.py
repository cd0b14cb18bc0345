"""Cadastro, login e verificação de sessão.

Junta ``UserStore``, ``PasswordHasher`` e ``TokenService``. Os erros de
negócio saem como ``ApiError``; erros inesperados do banco ou do bcrypt
sobem sem tratamento e viram 500 no handler global.
"""
from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from fastroute.core.crypto import PasswordHasher, TokenService
from fastroute.core.errors import Conflict, InvalidCredentials, InvalidToken
from fastroute.db.models import Usuario
from fastroute.db.users import DuplicateUserError, UserStore

logger = logging.getLogger(__name__)

CONFLICT_MESSAGES = {
    "email": "Este email já está cadastrado",
    "cpf": "Este CPF já está cadastrado",
}


def _conflict(field: str) -> Conflict:
    return Conflict(CONFLICT_MESSAGES[field], details={"campo": field})


class AccountService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def _session_for(self, user: Usuario) -> tuple[str, dict]:
        return self.tokens.issue(user.id, user.email, user.nome), user.public()

    async def register(self, nome: str, cpf: str, email: str, telefone: str | None,
                       senha: str) -> tuple[str, dict]:
        logger.info("Tentativa de cadastro: %s", email)

        if await self.store.find_by_email(email):
            raise _conflict("email")
        if await self.store.find_by_cpf(cpf):
            raise _conflict("cpf")

        senha_hash = await run_in_threadpool(self.hasher.hash, senha)
        try:
            user = await self.store.create(nome, cpf, email, telefone, senha_hash)
        except DuplicateUserError as e:
            # outra requisição gravou o mesmo email/CPF depois da checagem
            raise _conflict(e.field) from e

        # o usuário já está gravado; se a emissão do token falhar, vira 500
        return self._session_for(user)

    async def login(self, email: str, senha: str) -> tuple[str, dict]:
        logger.info("Tentativa de login: %s", email)

        user = await self.store.find_active_by_email(email)
        if user is None:
            raise InvalidCredentials()

        ok = await run_in_threadpool(self.hasher.verify, senha, user.senha)
        if not ok:
            logger.warning("Senha incorreta para %s", email)
            raise InvalidCredentials()

        await self.store.touch_last_activity(user.id)
        return self._session_for(user)

    async def verify(self, token: str) -> dict:
        """Assinatura + expiração + usuário ainda existente e ativo."""
        check = self.tokens.validate(token)
        if not check.valid:
            logger.warning("Erro na verificação do token: %s", check.reason)
            raise InvalidToken("Token inválido", status_code=401)

        user = await self.store.find_active_by_id(check.claims.user_id)
        if user is None:
            raise InvalidToken("Usuário não encontrado ou inativo", status_code=401)
        return user.public()
