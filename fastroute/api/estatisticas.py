# fastroute/api/estatisticas.py
from fastapi import APIRouter
from sqlalchemy import func, select

from fastroute.api.deps import SessionDep
from fastroute.db.models import Caminhao, Motorista

router = APIRouter()


async def _count(s, model) -> int:
    res = await s.execute(select(func.count()).select_from(model))
    return int(res.scalar_one())


@router.get("/total_motoristas")
async def total_motoristas(s: SessionDep):
    return {"total": await _count(s, Motorista)}


@router.get("/total_caminhoes")
async def total_caminhoes(s: SessionDep):
    return {"total": await _count(s, Caminhao)}
