# tests/test_protected_routes.py
import sqlite3
from datetime import timedelta

import pytest

from fastroute.core.config import settings
from fastroute.core.crypto import TokenService

PROTECTED = [
    "/api/tarefas",
    "/api/motoristas",
    "/api/caminhoes",
    "/api/estatisticas/total_motoristas",
    "/api/estatisticas/total_caminhoes",
]


@pytest.mark.parametrize("path", PROTECTED)
def test_missing_token_is_401(client, path):
    r = client.get(path)
    assert r.status_code == 401
    assert r.json() == {"error": "Token de acesso requerido"}


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "abc", "Basic dXNlcjpwYXNz"])
def test_malformed_header_is_401(client, header):
    r = client.get("/api/tarefas", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json() == {"error": "Token de acesso requerido"}


def test_verify_rejects_non_bearer_scheme(client):
    r = client.get("/api/auth/verify", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert r.status_code == 401
    assert r.json() == {"error": "Token não fornecido"}


def test_openapi_declares_bearer_scheme(client):
    schemes = client.get("/openapi.json").json()["components"]["securitySchemes"]
    assert schemes["HTTPBearer"]["type"] == "http"
    assert schemes["HTTPBearer"]["scheme"] == "bearer"


@pytest.mark.parametrize("path", PROTECTED)
def test_invalid_token_is_403(client, path):
    r = client.get(path, headers={"Authorization": "Bearer abc.def.ghi"})
    assert r.status_code == 403
    assert r.json() == {"error": "Token inválido ou expirado"}


def test_expired_token_is_403(client, registered):
    _, data = registered
    user = data["user"]
    expired = TokenService(settings.jwt_secret, settings.jwt_alg, timedelta(hours=-1))
    token = expired.issue(user["id"], user["email"], user["nome"])

    r = client.get("/api/tarefas", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403
    assert r.json() == {"error": "Token inválido ou expirado"}


def test_token_signed_with_other_secret_is_403(client, registered):
    _, data = registered
    user = data["user"]
    forged = TokenService("chave-de-um-atacante-com-tamanho-de-sobra-0123")
    token = forged.issue(user["id"], user["email"], user["nome"])

    r = client.get("/api/tarefas", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


@pytest.mark.parametrize("path", PROTECTED)
def test_valid_token_passes(client, auth_headers, path):
    r = client.get(path, headers=auth_headers)
    assert r.status_code == 200


def test_bearer_scheme_is_case_insensitive(client, registered):
    _, data = registered
    r = client.get("/api/tarefas", headers={"Authorization": f"bearer {data['token']}"})
    assert r.status_code == 200


def test_gate_does_not_recheck_active_flag(client, registered, db_path):
    _, data = registered
    headers = {"Authorization": f"Bearer {data['token']}"}

    with sqlite3.connect(db_path) as conn:
        conn.execute("UPDATE usuarios SET ativo = 0 WHERE id = ?", (data["user"]["id"],))

    # o gate só confere assinatura e expiração
    assert client.get("/api/tarefas", headers=headers).status_code == 200
    assert client.get("/api/auth/verify", headers=headers).status_code == 401


def test_public_routes_need_no_token(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").status_code == 200
