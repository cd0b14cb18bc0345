# fastroute/api/deps.py
import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fastroute.core.crypto import (
    PasswordHasher,
    TokenClaims,
    TokenService,
    build_password_hasher,
    build_token_service,
)
from fastroute.core.errors import AuthenticationRequired, InvalidToken
from fastroute.db.session import get_session
from fastroute.db.users import UserStore
from fastroute.services.accounts import AccountService


logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_token_service() -> TokenService:
    return build_token_service()


def get_password_hasher() -> PasswordHasher:
    return build_password_hasher()


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def get_account_service(
    session: SessionDep,
    tokens: TokenServiceDep,
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AccountService:
    return AccountService(UserStore(session), hasher, tokens)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]

# sem auto_error: a falta do token vira AuthenticationRequired (401) no formato da API
bearer = HTTPBearer(auto_error=False)
BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)]


def require_token(
    request: Request,
    tokens: TokenServiceDep,
    credentials: BearerCredentials,
) -> TokenClaims:
    """
    Gate das rotas protegidas: só assinatura e expiração, sem ir ao banco.
    Sem token -> 401, token inválido/expirado -> 403.
    """
    if credentials is None:
        raise AuthenticationRequired()

    check = tokens.validate(credentials.credentials)
    if not check.valid:
        logger.warning("Erro na verificação do token: %s", check.reason)
        raise InvalidToken()

    request.state.user = check.claims
    return check.claims


CurrentUser = Annotated[TokenClaims, Depends(require_token)]
