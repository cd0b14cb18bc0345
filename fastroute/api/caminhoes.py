# fastroute/api/caminhoes.py
import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from fastroute.api.deps import SessionDep
from fastroute.core.errors import Conflict
from fastroute.db.models import Caminhao

logger = logging.getLogger(__name__)

router = APIRouter()


class CaminhaoInput(BaseModel):
    placa: str = Field(min_length=1)
    modelo: str = Field(min_length=1)
    marca: str | None = None
    ano: int | None = None
    capacidade: float | None = None


@router.get("")
async def list_caminhoes(s: SessionDep):
    res = await s.execute(select(Caminhao).order_by(Caminhao.id))
    return [c.to_dict() for c in res.scalars().all()]


@router.post("", status_code=201)
async def create_caminhao(body: CaminhaoInput, s: SessionDep):
    caminhao = Caminhao(**body.model_dump(), disponivel=True)
    s.add(caminhao)
    try:
        await s.commit()
    except IntegrityError as e:
        await s.rollback()
        raise Conflict("Placa já cadastrada no sistema") from e
    await s.refresh(caminhao)
    logger.info("Caminhão %s cadastrado", caminhao.id)
    return caminhao.to_dict()
