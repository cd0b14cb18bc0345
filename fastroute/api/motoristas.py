# fastroute/api/motoristas.py
import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from fastroute.api.deps import SessionDep
from fastroute.core.errors import Conflict
from fastroute.db.models import Motorista

logger = logging.getLogger(__name__)

router = APIRouter()


class MotoristaInput(BaseModel):
    nome: str = Field(min_length=1)
    cnh: str = Field(min_length=1)
    telefone: str | None = None
    email: str | None = None


@router.get("")
async def list_motoristas(s: SessionDep):
    res = await s.execute(select(Motorista).order_by(Motorista.id))
    return [m.to_dict() for m in res.scalars().all()]


@router.post("", status_code=201)
async def create_motorista(body: MotoristaInput, s: SessionDep):
    motorista = Motorista(**body.model_dump(), disponivel=True)
    s.add(motorista)
    try:
        await s.commit()
    except IntegrityError as e:
        await s.rollback()
        raise Conflict("CNH já cadastrada no sistema") from e
    await s.refresh(motorista)
    logger.info("Motorista %s cadastrado", motorista.id)
    return motorista.to_dict()
