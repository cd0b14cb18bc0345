# fastroute/api/tarefas.py
import logging
from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select

from fastroute.api.deps import CurrentUser, SessionDep
from fastroute.core.errors import NotFound, ValidationFailed
from fastroute.db.models import Tarefa

logger = logging.getLogger(__name__)

router = APIRouter()

# colunas que não aceitam null no PATCH
REQUIRED_FIELDS = ("codigo", "cliente", "endereco", "tipo", "equipamento", "peso", "status")


class TarefaInput(BaseModel):
    codigo: str = Field(min_length=1)
    cliente: str = Field(min_length=1)
    endereco: str = Field(min_length=1)
    tipo: str = Field(min_length=1)
    equipamento: str = Field(min_length=1)
    peso: float = Field(gt=0)
    data: date | None = None
    periodo: str | None = None


class TarefaUpdate(TarefaInput):
    status: str = Field(min_length=1)


class TarefaPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    codigo: str | None = Field(None, min_length=1)
    cliente: str | None = Field(None, min_length=1)
    endereco: str | None = Field(None, min_length=1)
    tipo: str | None = Field(None, min_length=1)
    equipamento: str | None = Field(None, min_length=1)
    peso: float | None = Field(None, gt=0)
    data: date | None = None
    periodo: str | None = None
    status: str | None = Field(None, min_length=1)


async def _get_or_404(s, tarefa_id: int) -> Tarefa:
    tarefa = await s.get(Tarefa, tarefa_id)
    if tarefa is None:
        raise NotFound("Tarefa não encontrada")
    return tarefa


@router.get("")
async def list_tarefas(s: SessionDep):
    res = await s.execute(select(Tarefa).order_by(Tarefa.id.desc()))
    return [t.to_dict() for t in res.scalars().all()]


@router.post("", status_code=201)
async def create_tarefa(body: TarefaInput, s: SessionDep, user: CurrentUser):
    tarefa = Tarefa(**body.model_dump(), status="Pendente")
    s.add(tarefa)
    await s.commit()
    await s.refresh(tarefa)
    logger.info("Tarefa %s criada por usuário %s", tarefa.id, user.user_id)
    return tarefa.to_dict()


@router.put("/{tarefa_id}")
async def update_tarefa(tarefa_id: int, body: TarefaUpdate, s: SessionDep):
    tarefa = await _get_or_404(s, tarefa_id)
    for field, value in body.model_dump().items():
        setattr(tarefa, field, value)
    await s.commit()
    await s.refresh(tarefa)
    logger.info("Tarefa %s atualizada", tarefa_id)
    return tarefa.to_dict()


@router.patch("/{tarefa_id}")
async def patch_tarefa(tarefa_id: int, body: TarefaPatch, s: SessionDep):
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationFailed("Nenhum campo para atualizar")

    nulls = [f for f in REQUIRED_FIELDS if f in updates and updates[f] is None]
    if nulls:
        raise ValidationFailed(
            details=[{"campo": f, "mensagem": "Campo não pode ser nulo"} for f in nulls]
        )

    tarefa = await _get_or_404(s, tarefa_id)
    for field, value in updates.items():
        setattr(tarefa, field, value)
    await s.commit()
    await s.refresh(tarefa)
    logger.info("Tarefa %s atualizada parcialmente: %s", tarefa_id, sorted(updates))
    return tarefa.to_dict()


@router.delete("/{tarefa_id}")
async def delete_tarefa(tarefa_id: int, s: SessionDep):
    tarefa = await _get_or_404(s, tarefa_id)
    data = tarefa.to_dict()
    await s.delete(tarefa)
    await s.commit()
    logger.info("Tarefa %s deletada", tarefa_id)
    return {"message": "Tarefa deletada com sucesso", "tarefa": data}
