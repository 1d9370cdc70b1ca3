# app/errors.py
from typing import Any, Dict, Optional


class APIError(Exception):
    """Base for errors that are rendered as the JSON error envelope."""

    status_code = 500
    code = "SERVER_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "code": self.code}


class Unauthorized(APIError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ValidationFailed(APIError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid product data"


class NotFound(APIError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Product not found"


def error_envelope(message: str, code: str) -> Dict[str, Any]:
    return {"success": False, "error": message, "code": code}
