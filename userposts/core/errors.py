from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"


class APIError(Exception):
    """Erro base convertido em {"error": message} pelo handler global"""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class BadRequestError(APIError):
    status_code = 400
    message = "Bad request"


class ConflictError(APIError):
    status_code = 409
    message = "Conflict"


class StorageError(APIError):
    status_code = 500
    message = "Database error"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Detecta violação de UNIQUE no PostgreSQL (SQLSTATE 23505) ou no SQLite"""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)
