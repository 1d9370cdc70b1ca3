# app/security.py
from typing import Any, Dict

import structlog
from jose import JWTError, jwt

from .config import Settings
from .errors import Unauthorized

logger = structlog.get_logger()


class MarkerVerifier:
    """Accepts any token. Only the "Bearer " marker is checked by the gate."""

    def verify(self, token: str) -> Dict[str, Any]:
        return {}


class JWTVerifier:
    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("AUTH_SECRET_KEY must be set when AUTH_MODE=jwt")
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning("JWT validation error", error=str(e))
            raise Unauthorized("Invalid or expired token")


def build_verifier(settings: Settings):
    mode = settings.auth_mode.lower()
    if mode == "marker":
        return MarkerVerifier()
    if mode == "jwt":
        return JWTVerifier(settings.auth_secret_key, settings.auth_algorithm)
    raise ValueError(f"unknown AUTH_MODE: {settings.auth_mode}")
