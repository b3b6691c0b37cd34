"""
SQLAlchemy ORM models.

Tables
------
* ``users``     -- every identity, whatever its role
* ``vehicles``  -- fleet assets; ``assigned_driver_id`` is a weak reference
* ``trips``     -- single ride/job instances
* ``bookings``  -- customer booking records (no lifecycle rules)

Indexes
-------
* **Unique** on ``users.email``.
* **B-Tree** on the status / role columns counted by the dashboard and on the
  driver / customer keys used for look-ups.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    String,
    func,
)

from .database import Base
from fleetops.domain.enums import ApprovalStatus, Role, TripStatus, VehicleStatus


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(120), nullable=False)
    phone = Column(String(40), nullable=True)
    license_number = Column(String(64), nullable=True)
    role = Column(Enum(Role), nullable=False)
    approval_status = Column(
        Enum(ApprovalStatus), default=ApprovalStatus.APPROVED, nullable=False
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_users_role_approval", "role", "approval_status"),
    )
    # Load created_at on INSERT so entities can be built without lazy IO.
    __mapper_args__ = {"eager_defaults": True}


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    license_plate = Column(String(32), nullable=False)
    type = Column(String(32), nullable=True)
    model = Column(String(120), nullable=True)
    status = Column(Enum(VehicleStatus), nullable=True)
    capacity = Column(Integer, nullable=True)
    fuel_type = Column(String(32), nullable=True)
    last_service_date = Column(DateTime(timezone=True), nullable=True)
    next_service_due = Column(DateTime(timezone=True), nullable=True)
    # No FK constraint: drivers may be referenced before they exist.
    assigned_driver_id = Column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_vehicles_status", "status"),
        Index("idx_vehicles_driver", "assigned_driver_id"),
    )


class TripModel(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(Integer, nullable=True)
    vehicle_id = Column(Integer, nullable=True)
    customer_id = Column(Integer, nullable=True)
    customer_name = Column(String(120), nullable=True)

    status = Column(Enum(TripStatus), default=TripStatus.PENDING, nullable=False)

    pickup_lat = Column(Float, nullable=True)
    pickup_lng = Column(Float, nullable=True)
    pickup_address = Column(String(255), nullable=True)
    dest_lat = Column(Float, nullable=True)
    dest_lng = Column(Float, nullable=True)
    dest_address = Column(String(255), nullable=True)

    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_trips_driver_status", "driver_id", "status"),
        Index("idx_trips_customer", "customer_id"),
    )


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=True)
    customer_name = Column(String(120), nullable=True)
    vehicle_id = Column(Integer, nullable=True)
    vehicle_type = Column(String(32), nullable=True)

    pickup_lat = Column(Float, nullable=True)
    pickup_lng = Column(Float, nullable=True)
    pickup_address = Column(String(255), nullable=True)
    dest_lat = Column(Float, nullable=True)
    dest_lng = Column(Float, nullable=True)
    dest_address = Column(String(255), nullable=True)

    status = Column(String(20), default="PENDING", nullable=False)
    estimated_fare = Column(Float, nullable=True)
    estimated_duration = Column(Integer, nullable=True)
    estimated_distance = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_bookings_customer", "customer_id"),)
    __mapper_args__ = {"eager_defaults": True}
