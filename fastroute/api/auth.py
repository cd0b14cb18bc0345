# fastroute/api/auth.py
from typing import Annotated

from fastapi import APIRouter
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator

from fastroute.api.deps import AccountServiceDep, BearerCredentials
from fastroute.core.crypto import MIN_PASSWORD_LENGTH
from fastroute.core.errors import AuthenticationRequired

router = APIRouter()

CPF_PATTERN = r"^\d{3}\.\d{3}\.\d{3}-\d{2}$"
TELEFONE_PATTERN = r"^\(\d{2}\) \d{4,5}-\d{4}$"


class _EmailInput(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()


class LoginInput(_EmailInput):
    senha: str = Field(min_length=1)


class RegisterInput(_EmailInput):
    nome: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    cpf: Annotated[str, StringConstraints(pattern=CPF_PATTERN)]
    telefone: Annotated[str, StringConstraints(pattern=TELEFONE_PATTERN)] | None = None
    senha: str = Field(min_length=MIN_PASSWORD_LENGTH)


@router.post("/login")
async def login(body: LoginInput, accounts: AccountServiceDep):
    token, user = await accounts.login(body.email, body.senha)
    return {"message": "Login realizado com sucesso", "token": token, "user": user}


@router.post("/register", status_code=201)
async def register(body: RegisterInput, accounts: AccountServiceDep):
    token, user = await accounts.register(
        body.nome, body.cpf, body.email, body.telefone, body.senha
    )
    return {"message": "Usuário cadastrado com sucesso", "token": token, "user": user}


@router.get("/verify")
async def verify(accounts: AccountServiceDep, credentials: BearerCredentials):
    if credentials is None:
        raise AuthenticationRequired("Token não fornecido")
    user = await accounts.verify(credentials.credentials)
    return {"valid": True, "user": user}
