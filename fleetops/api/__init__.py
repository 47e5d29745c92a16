"""Routes API / API routes."""

from fastapi import APIRouter

from fleetops.api import (
    vehicles,
    contracts,
    fleet,
    reports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
api_router.include_router(fleet.router, prefix="/fleet", tags=["fleet"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
