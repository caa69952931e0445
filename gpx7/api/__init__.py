"""Routes API / API routes."""

from fastapi import APIRouter

from gpx7.api import (
    vehicles,
    maintenance,
    checklists,
    fueling,
    fines,
    reports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])
api_router.include_router(checklists.router, prefix="/checklists", tags=["checklists"])
api_router.include_router(fueling.router, prefix="/fueling", tags=["fueling"])
api_router.include_router(fines.router, prefix="/fines", tags=["fines"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
