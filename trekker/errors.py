# trekker/errors.py
from __future__ import annotations


class AppError(Exception):
    """Base for errors that map to a stable HTTP status and error code."""

    def __init__(self, status_code: int, code: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


class NotFoundError(AppError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(404, "NOT_FOUND", f"{entity} not found: {entity_id}")


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(400, "VALIDATION_ERROR", message)


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(409, "CONFLICT", message)


class DatabaseError(AppError):
    def __init__(self, message: str):
        super().__init__(500, "DATABASE_ERROR", message)
