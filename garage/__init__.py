"""
Garage fleet and maintenance tracking.

This package provides the domain model and persistence for a small garage:
- MaintenanceRecord: Service events and scheduled appointments
- Vehicle, Car, SportsCar, Truck: Vehicle variants with maintenance history
- Garage: Bounded fleet aggregate, sole writer to storage
- codec: JSON round-trip of the stored fleet
- MemoryStore, FileStore: Key-value storage collaborators
"""

from .errors import (
    GarageError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    CorruptDataError,
)
from .status import ScheduleStatus
from .calculations import start_of_today, to_local_datetime, check_schedule
from .maintenance_record import MaintenanceRecord
from .vehicle import Vehicle, Car, SportsCar, Truck, VARIANTS, create_vehicle
from .upcoming import UpcomingMaintenance
from .outcome import Outcome, LoadReport
from .codec import encode_fleet, decode_fleet, vehicle_from_dict
from .storage import KeyValueStore, MemoryStore, FileStore
from .garage import Garage
from .config import Config, load_config

__all__ = [
    "GarageError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "CorruptDataError",
    "ScheduleStatus",
    "start_of_today",
    "to_local_datetime",
    "check_schedule",
    "MaintenanceRecord",
    "Vehicle",
    "Car",
    "SportsCar",
    "Truck",
    "VARIANTS",
    "create_vehicle",
    "UpcomingMaintenance",
    "Outcome",
    "LoadReport",
    "encode_fleet",
    "decode_fleet",
    "vehicle_from_dict",
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "Garage",
    "Config",
    "load_config",
]
