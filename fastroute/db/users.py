"""Acesso aos usuários (credenciais) no banco.

A unicidade de email e CPF é garantida pelas constraints da tabela; as
consultas ``find_by_*`` servem apenas para dar uma mensagem melhor antes do
insert. Se duas requisições passarem pela checagem ao mesmo tempo, o insert
da segunda falha com ``DuplicateUserError``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fastroute.db.models import Usuario

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("email", "cpf")


class DuplicateUserError(Exception):
    """O banco recusou o insert por violar a unicidade de ``field``."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"duplicate {field}")


def _duplicated_field(exc: IntegrityError) -> str | None:
    text = str(exc.orig).lower()
    for field in UNIQUE_FIELDS:
        if field in text:
            return field
    return None


class UserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *conditions) -> Usuario | None:
        res = await self.session.execute(select(Usuario).where(*conditions))
        return res.scalar_one_or_none()

    async def find_active_by_email(self, email: str) -> Usuario | None:
        return await self._first(Usuario.email == email, Usuario.ativo.is_(True))

    async def find_by_email(self, email: str) -> Usuario | None:
        return await self._first(Usuario.email == email)

    async def find_by_cpf(self, cpf: str) -> Usuario | None:
        return await self._first(Usuario.cpf == cpf)

    async def find_active_by_id(self, user_id: int) -> Usuario | None:
        return await self._first(Usuario.id == user_id, Usuario.ativo.is_(True))

    async def create(self, nome: str, cpf: str, email: str, telefone: str | None,
                     senha_hash: str) -> Usuario:
        user = Usuario(nome=nome, cpf=cpf, email=email, telefone=telefone,
                       senha=senha_hash, ativo=True)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            field = _duplicated_field(e)
            if field is None:
                raise
            raise DuplicateUserError(field) from e
        await self.session.refresh(user)
        logger.info("Usuário criado: id=%s", user.id)
        return user

    async def touch_last_activity(self, user_id: int) -> None:
        await self.session.execute(
            update(Usuario)
            .where(Usuario.id == user_id)
            .values(ultima_atualizacao=datetime.now(timezone.utc))
        )
        await self.session.commit()
