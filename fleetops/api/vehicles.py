"""Routes Vehicules / Vehicle API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetops.database import get_db
from fleetops.models.vehicle import Vehicle, VehicleStatus, VehicleType
from fleetops.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate

router = APIRouter()


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(
    status: VehicleStatus | None = None,
    vehicle_type: VehicleType | None = None,
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """Lister les vehicules actifs / List active vehicles."""
    query = select(Vehicle).order_by(Vehicle.code)
    if not include_inactive:
        query = query.where(Vehicle.is_active.is_(True))
    if status is not None:
        query = query.where(Vehicle.status == status)
    if vehicle_type is not None:
        query = query.where(Vehicle.vehicle_type == vehicle_type)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Voir un vehicule / Get vehicle detail."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(data: VehicleCreate, db: AsyncSession = Depends(get_db)):
    """Creer un vehicule / Create vehicle."""
    existing = await db.execute(select(Vehicle.id).where(Vehicle.code == data.code))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail=f"Vehicle code {data.code} already exists")
    vehicle = Vehicle(**data.model_dump(), is_active=True)
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(vehicle_id: int, data: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    """Modifier un vehicule / Update vehicle."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    if data.code is not None and data.code != vehicle.code:
        existing = await db.execute(select(Vehicle.id).where(Vehicle.code == data.code))
        if existing.scalar_one_or_none() is not None:
            raise HTTPException(status_code=409, detail=f"Vehicle code {data.code} already exists")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(vehicle, key, value)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Desactiver un vehicule (suppression logique) / Deactivate vehicle (soft delete)."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    vehicle.is_active = False
