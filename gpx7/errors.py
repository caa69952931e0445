"""Erreurs du domaine / Domain errors.

Chaque erreur porte son code HTTP, les handlers FastAPI les servent telles quelles.
Each error carries its HTTP status, FastAPI serves them as-is.
"""

from fastapi import HTTPException, status


class FleetError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class ValidationError(FleetError):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class NotFoundError(FleetError):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(FleetError):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StoreError(FleetError):
    def __init__(self, detail: str = "Internal storage error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
