# tests/test_security.py
import time

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import Settings
from app.database import ProductStore
from app.main import create_app
from app.security import JWTVerifier, MarkerVerifier, build_verifier

SECRET = "test-secret"


@pytest.fixture
def jwt_client():
    settings = Settings(auth_mode="jwt", auth_secret_key=SECRET)
    return TestClient(create_app(settings=settings, store=ProductStore.with_seed_data()))


def _token(claims=None, secret=SECRET):
    return jwt.encode(claims or {"sub": "tester"}, secret, algorithm="HS256")


def test_build_verifier():
    assert isinstance(build_verifier(Settings(auth_mode="marker")), MarkerVerifier)
    assert isinstance(build_verifier(Settings(auth_mode="JWT", auth_secret_key=SECRET)), JWTVerifier)
    with pytest.raises(ValueError):
        build_verifier(Settings(auth_mode="jwt", auth_secret_key=""))
    with pytest.raises(ValueError):
        build_verifier(Settings(auth_mode="oauth"))


def test_signed_token_is_accepted(jwt_client):
    r = jwt_client.post(
        "/api/products",
        json={"name": "Desk", "price": 100},
        headers={"Authorization": f"Bearer {_token()}"},
    )
    assert r.status_code == 201


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        _token(secret="other-secret"),
        _token({"sub": "tester", "exp": int(time.time()) - 60}),
    ],
)
def test_bad_tokens_are_rejected(jwt_client, token):
    r = jwt_client.delete("/api/products/1", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Invalid or expired token", "code": "UNAUTHORIZED"}
    assert jwt_client.get("/api/products/1").status_code == 200


def test_missing_marker_in_jwt_mode(jwt_client):
    r = jwt_client.delete("/api/products/1", headers={"Authorization": _token()})
    assert r.status_code == 401
    assert r.json()["error"] == "Authentication required"
