"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fleetops.domain.entities import Booking, Location, Trip, Vehicle
from fleetops.domain.enums import ApprovalStatus, Role, TripStatus, VehicleStatus


# ── Shared ────────────────────────────────────────────────────────────


class LocationSchema(BaseModel):
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)
    address: str = ""

    model_config = {"from_attributes": True}

    def to_entity(self) -> Location:
        return Location(self.latitude, self.longitude, self.address)


# ── Requests ──────────────────────────────────────────────────────────


class SignupRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)
    phone: Optional[str] = None
    license_number: Optional[str] = None
    role: Optional[str] = Field(
        None,
        description='Role name, case-insensitive; spaces allowed ("fleet manager").',
    )


class SigninRequest(BaseModel):
    email: str
    password: str


class VehicleRequest(BaseModel):
    """Full vehicle record.  On update every field is overwritten."""

    name: str = Field(..., min_length=1, max_length=120)
    license_plate: str = Field(..., min_length=1, max_length=32)
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[VehicleStatus] = None
    capacity: Optional[int] = Field(None, ge=0)
    fuel_type: Optional[str] = None
    last_service_date: Optional[datetime] = None
    next_service_due: Optional[datetime] = None
    assigned_driver_id: Optional[int] = None

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status_is_unset(cls, value):
        return None if value == "" else value

    def to_entity(self) -> Vehicle:
        return Vehicle(
            name=self.name,
            license_plate=self.license_plate,
            type=self.type,
            model=self.model,
            status=self.status,
            capacity=self.capacity,
            fuel_type=self.fuel_type,
            last_service_date=self.last_service_date,
            next_service_due=self.next_service_due,
            assigned_driver_id=self.assigned_driver_id,
        )


class TripCreateRequest(BaseModel):
    """Status and timestamps are set server-side; any sent are ignored."""

    driver_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    pickup: LocationSchema = Field(default_factory=LocationSchema)
    destination: LocationSchema = Field(default_factory=LocationSchema)

    def to_entity(self) -> Trip:
        return Trip(
            driver_id=self.driver_id,
            vehicle_id=self.vehicle_id,
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            pickup=self.pickup.to_entity(),
            destination=self.destination.to_entity(),
        )


class BookingRequest(BaseModel):
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    vehicle_id: Optional[int] = None
    vehicle_type: Optional[str] = None
    pickup: LocationSchema = Field(default_factory=LocationSchema)
    destination: LocationSchema = Field(default_factory=LocationSchema)
    status: str = "PENDING"
    estimated_fare: Optional[float] = Field(None, ge=0)
    estimated_duration: Optional[int] = Field(None, ge=0)
    estimated_distance: Optional[float] = Field(None, ge=0)

    def to_entity(self) -> Booking:
        return Booking(
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            vehicle_id=self.vehicle_id,
            vehicle_type=self.vehicle_type,
            pickup=self.pickup.to_entity(),
            destination=self.destination.to_entity(),
            status=self.status,
            estimated_fare=self.estimated_fare,
            estimated_duration=self.estimated_duration,
            estimated_distance=self.estimated_distance,
        )


# ── Responses ─────────────────────────────────────────────────────────


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    phone: Optional[str] = None
    license_number: Optional[str] = None
    role: Role
    approval_status: ApprovalStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class JwtResponse(BaseModel):
    token: str
    type: str = "Bearer"
    id: int
    email: str
    name: str
    roles: list[str]
    approval_status: ApprovalStatus


class VehicleResponse(BaseModel):
    id: int
    name: str
    license_plate: str
    type: Optional[str] = None
    model: Optional[str] = None
    status: Optional[VehicleStatus] = None
    capacity: Optional[int] = None
    fuel_type: Optional[str] = None
    last_service_date: Optional[datetime] = None
    next_service_due: Optional[datetime] = None
    assigned_driver_id: Optional[int] = None

    model_config = {"from_attributes": True}


class TripResponse(BaseModel):
    id: int
    driver_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    status: TripStatus
    pickup: LocationSchema
    destination: LocationSchema
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    vehicle_id: Optional[int] = None
    vehicle_type: Optional[str] = None
    pickup: LocationSchema
    destination: LocationSchema
    status: str
    estimated_fare: Optional[float] = None
    estimated_duration: Optional[int] = None
    estimated_distance: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DashboardStatsResponse(BaseModel):
    total_vehicles: int
    active_vehicles: int
    total_drivers: int
    active_drivers: int
    pending_approvals: int
    vehicles_needing_service: int

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
