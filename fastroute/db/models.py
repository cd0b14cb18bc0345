# fastroute/db/models.py
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, Float, Boolean, Date, DateTime
from datetime import date, datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    def to_dict(self) -> dict:
        return {c.key: getattr(self, c.key) for c in self.__mapper__.column_attrs}


class Usuario(Base):
    __tablename__ = "usuarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(100))
    cpf: Mapped[str] = mapped_column(String(14), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    telefone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # hash bcrypt, nunca a senha em texto
    senha: Mapped[str] = mapped_column(String(100))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    ultima_atualizacao: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def public(self) -> dict:
        return {"id": self.id, "nome": self.nome, "email": self.email}


class Tarefa(Base):
    __tablename__ = "tarefas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    codigo: Mapped[str] = mapped_column(String(50))
    cliente: Mapped[str] = mapped_column(String(200))
    endereco: Mapped[str] = mapped_column(String(300))
    tipo: Mapped[str] = mapped_column(String(50))
    equipamento: Mapped[str] = mapped_column(String(100))
    peso: Mapped[float] = mapped_column(Float)
    data: Mapped[date | None] = mapped_column(Date, nullable=True)
    periodo: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(String(30), default="Pendente")


class Motorista(Base):
    __tablename__ = "motoristas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(100))
    cnh: Mapped[str] = mapped_column(String(20), unique=True)
    telefone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    disponivel: Mapped[bool] = mapped_column(Boolean, default=True)


class Caminhao(Base):
    __tablename__ = "caminhoes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    placa: Mapped[str] = mapped_column(String(10), unique=True)
    modelo: Mapped[str] = mapped_column(String(100))
    marca: Mapped[str | None] = mapped_column(String(100), nullable=True)
    ano: Mapped[int | None] = mapped_column(Integer, nullable=True)
    capacidade: Mapped[float | None] = mapped_column(Float, nullable=True)
    disponivel: Mapped[bool] = mapped_column(Boolean, default=True)
