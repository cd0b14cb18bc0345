# tests/conftest.py
import os
import sys
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# --- Garantir que 'fastroute' seja importável a partir da raiz do repo ---
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TMP = (ROOT / ".pytest_tmp").absolute()
DB_PATH = TMP / "test.sqlite3"
TEST_SECRET = "segredo-de-teste-com-tamanho-suficiente-para-hs256"


def _prepare_test_env() -> None:
    TMP.mkdir(exist_ok=True)
    # banco novo a cada sessão de testes
    if DB_PATH.exists():
        DB_PATH.unlink()

    os.environ["DB_URL"] = f"sqlite+aiosqlite:///{DB_PATH.as_posix()}"
    os.environ["JWT_SECRET"] = TEST_SECRET
    os.environ["JWT_ALG"] = "HS256"
    # custo mínimo do bcrypt para os testes não ficarem lentos
    os.environ["BCRYPT_ROUNDS"] = "4"
    os.environ["ENVIRONMENT"] = "development"


_prepare_test_env()


@pytest.fixture(scope="session")
def client():
    """
    Cliente de testes com ambiente efêmero:
    - banco sqlite em .pytest_tmp/test.sqlite3
    - JWT_SECRET de teste, sem depender de .env
    """
    from fastroute.main import app
    # Com 'with' o lifespan roda: cria as tabelas no startup e fecha o engine no shutdown
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_path() -> Path:
    return DB_PATH


def user_payload(**overrides) -> dict:
    """Dados de cadastro válidos com email e CPF únicos."""
    n = uuid.uuid4().int
    digits = f"{n % 10**11:011d}"
    payload = {
        "nome": f"Usuário {digits[:6]}",
        "cpf": f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}",
        "email": f"usuario{uuid.uuid4().hex[:12]}@fastroute.com.br",
        "senha": "senha123",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def registered(client):
    """Registra um usuário novo e devolve (payload, resposta JSON)."""
    payload = user_payload()
    r = client.post("/api/auth/register", json=payload)
    assert r.status_code == 201, r.text
    return payload, r.json()


@pytest.fixture
def auth_headers(registered) -> dict:
    _, data = registered
    return {"Authorization": f"Bearer {data['token']}"}


# --- Restaurar settings depois de cada teste (autouse) ---
@pytest.fixture(autouse=True)
def _reset_settings_between_tests():
    from fastroute.core.config import settings
    snapshot = (settings.environment, settings.jwt_secret, settings.token_ttl_hours)
    yield
    settings.environment, settings.jwt_secret, settings.token_ttl_hours = snapshot
