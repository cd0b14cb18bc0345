# fastroute/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from starlette.exceptions import HTTPException as StarletteHTTPException

from fastroute.api.auth import router as auth_router
from fastroute.api.caminhoes import router as caminhoes_router
from fastroute.api.deps import require_token
from fastroute.api.estatisticas import router as estatisticas_router
from fastroute.api.motoristas import router as motoristas_router
from fastroute.api.tarefas import router as tarefas_router

from fastroute.core.config import settings
from fastroute.core.errors import ApiError, InternalError, ValidationFailed
from fastroute.core.logging_config import setup_logging
from fastroute.db.session import engine, SessionLocal
from fastroute.db.models import Base

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

ENDPOINTS = [
    "POST /api/auth/login - Login de usuário",
    "POST /api/auth/register - Cadastro de usuário",
    "GET /api/auth/verify - Verificar token",
    "GET /api/tarefas - Listar tarefas (requer autenticação)",
    "POST /api/tarefas - Criar tarefa (requer autenticação)",
    "PUT /api/tarefas/:id - Atualizar tarefa (requer autenticação)",
    "PATCH /api/tarefas/:id - Atualizar parcialmente (requer autenticação)",
    "DELETE /api/tarefas/:id - Deletar tarefa (requer autenticação)",
    "GET /api/motoristas - Listar motoristas (requer autenticação)",
    "POST /api/motoristas - Criar motorista (requer autenticação)",
    "GET /api/caminhoes - Listar caminhões (requer autenticação)",
    "POST /api/caminhoes - Criar caminhão (requer autenticação)",
    "GET /api/estatisticas/total_motoristas - Total de motoristas (requer autenticação)",
    "GET /api/estatisticas/total_caminhoes - Total de caminhões (requer autenticação)",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    if settings.uses_dev_secret:
        logger.warning("JWT_SECRET não definido: usando a chave de desenvolvimento")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # === SHUTDOWN ===
    await engine.dispose()

app = FastAPI(title="FastRoute - Gestão de Tarefas", lifespan=lifespan)


def _internal_error_response(exc: Exception) -> JSONResponse:
    err = InternalError(details=str(exc))
    return JSONResponse(err.to_body(include_details=not settings.is_production),
                        status_code=err.status_code)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Erro não capturado em %s %s", request.method, request.url.path)
        return _internal_error_response(exc)


# registrado por último: fica por fora e põe os headers CORS também nas respostas 500
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "campo": ".".join(str(p) for p in err["loc"] if p != "body"),
            "mensagem": err["msg"],
        }
        for err in exc.errors()
    ]
    err = ValidationFailed(details=details)
    return JSONResponse(err.to_body(), status_code=err.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        body = {"error": "Rota não encontrada", "path": request.url.path, "method": request.method}
    else:
        body = {"error": exc.detail}
    return JSONResponse(body, status_code=exc.status_code, headers=exc.headers)


# Rotas públicas
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])

# Rotas protegidas: todas passam pelo gate do token
protected = [Depends(require_token)]
app.include_router(tarefas_router, prefix="/api/tarefas", tags=["tarefas"], dependencies=protected)
app.include_router(motoristas_router, prefix="/api/motoristas", tags=["motoristas"], dependencies=protected)
app.include_router(caminhoes_router, prefix="/api/caminhoes", tags=["caminhoes"], dependencies=protected)
app.include_router(estatisticas_router, prefix="/api/estatisticas", tags=["estatisticas"], dependencies=protected)


@app.get("/")
def root():
    return {
        "message": "API de Gestão de Tarefas funcionando!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": ENDPOINTS,
    }


@app.get("/health")
async def health():
    try:
        async with SessionLocal() as s:
            now = (await s.execute(select(func.now()))).scalar_one()
    except Exception as exc:
        logger.error("Health check sem banco: %s", exc)
        return JSONResponse(
            {"status": "ERROR", "database": "Disconnected", "error": str(exc)},
            status_code=500,
        )
    return {"status": "OK", "database": "Connected", "timestamp": str(now)}
