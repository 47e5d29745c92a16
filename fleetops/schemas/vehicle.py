"""Schémas Véhicule / Vehicle schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from fleetops.models.vehicle import VehicleStatus, VehicleType


class VehicleBase(BaseModel):
    code: str
    vehicle_type: VehicleType
    brand: str | None = None
    model: str | None = None
    year: int | None = None
    plate: str | None = None
    chassis: str | None = None
    capacity: str | None = None
    status: VehicleStatus = VehicleStatus.STOPPED
    default_daily_rate: Decimal = Field(default=Decimal("0"), ge=0)
    default_monthly_rate: Decimal = Field(default=Decimal("0"), ge=0)


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    code: str | None = None
    vehicle_type: VehicleType | None = None
    brand: str | None = None
    model: str | None = None
    year: int | None = None
    plate: str | None = None
    chassis: str | None = None
    capacity: str | None = None
    status: VehicleStatus | None = None
    default_daily_rate: Decimal | None = Field(default=None, ge=0)
    default_monthly_rate: Decimal | None = Field(default=None, ge=0)

    @field_validator("code", "vehicle_type", "status", "default_daily_rate", "default_monthly_rate")
    @classmethod
    def _reject_null(cls, value, info: ValidationInfo):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class VehicleRead(VehicleBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    is_active: bool = True
