"""Vehicle classes - the base vehicle and its Car, SportsCar and Truck variants."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Type

from .calculations import start_of_today
from .errors import ValidationError
from .maintenance_record import MaintenanceRecord

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Available"


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()


def _require_count(name: str, value: Any) -> int:
    """Positive integer (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Invalid {name}: {value!r} (must be a positive integer)")
    return value


def _require_number(name: str, value: Any, allow_zero: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Invalid {name}: {value!r} (must be a number)")
    if value < 0 or (value == 0 and not allow_zero) or value != value:
        bound = ">= 0" if allow_zero else "> 0"
        raise ValidationError(f"Invalid {name}: {value!r} (must be {bound})")
    return value


class Vehicle:
    """A vehicle in the garage, with its maintenance history."""

    variant_tag = "Vehicle"

    def __init__(
        self,
        id: str,
        brand: str,
        model: str,
        year: int,
        color: str,
        status: str = DEFAULT_STATUS,
    ):
        self._id = _require_text("ID", id)
        self.brand = _require_text("Brand", brand)
        self.model = _require_text("Model", model)
        self.year = _require_count("year", year)
        self.color = _require_text("Color", color)
        self.status = _require_text("Status", status)
        self.maintenance_history: List[MaintenanceRecord] = []

    @property
    def id(self) -> str:
        """Vehicle id (e.g. license plate). Immutable."""
        return self._id

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.brand} {self.model}"

    @property
    def label(self) -> str:
        """Short identification used in reminders."""
        return f"{self.brand} {self.model} (ID: {self.id})"

    def __repr__(self) -> str:
        return f"<{self.variant_tag} {self.id} {self.name!r}>"

    def set_status(self, status: str) -> None:
        self.status = _require_text("Status", status)

    def _sort_history(self) -> None:
        self.maintenance_history.sort(key=lambda r: r.date, reverse=True)

    def add_maintenance(self, record: MaintenanceRecord) -> bool:
        """Add a record and keep history newest first. False if not a record."""
        if not isinstance(record, MaintenanceRecord):
            logger.warning("Rejected maintenance for %s: not a MaintenanceRecord: %r", self.id, record)
            return False
        self.maintenance_history.append(record)
        self._sort_history()
        return True

    def remove_maintenance(self, record_id: str) -> bool:
        """Remove the record with the given id. False if no such record."""
        for index, record in enumerate(self.maintenance_history):
            if record.id == record_id:
                del self.maintenance_history[index]
                return True
        return False

    def find_record(self, record_id: str) -> Optional[MaintenanceRecord]:
        for record in self.maintenance_history:
            if record.id == record_id:
                return record
        return None

    def past_records(self, now: Optional[datetime] = None) -> List[MaintenanceRecord]:
        """Records dated on or before the start of today, newest first."""
        cutoff = start_of_today(now)
        return [r for r in self.maintenance_history if r.date <= cutoff]

    def future_records(self, now: Optional[datetime] = None) -> List[MaintenanceRecord]:
        """Records dated after the start of today, newest first."""
        cutoff = start_of_today(now)
        return [r for r in self.maintenance_history if r.date > cutoff]

    def describe(self) -> str:
        """Detail line: base info followed by the variant's own fields."""
        parts = [
            f"ID: {self.id}",
            f"Brand: {self.brand}",
            f"Model: {self.model}",
            f"Year: {self.year}",
            f"Color: {self.color}",
            f"Status: {self.status}",
        ]
        match self:
            case SportsCar():
                parts += [f"Doors: {self.door_count}", f"Top speed: {self.top_speed} km/h"]
            case Car():
                parts += [f"Doors: {self.door_count}"]
            case Truck():
                parts += [f"Cargo: {self.cargo_capacity} t", f"Axles: {self.axle_count}"]
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored dict format (camelCase keys)."""
        data: Dict[str, Any] = {
            "variantTag": self.variant_tag,
            "id": self.id,
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "status": self.status,
            "maintenanceHistory": [r.to_dict() for r in self.maintenance_history],
        }
        match self:
            case SportsCar():
                data["doorCount"] = self.door_count
                data["topSpeed"] = self.top_speed
            case Car():
                data["doorCount"] = self.door_count
            case Truck():
                data["cargoCapacity"] = self.cargo_capacity
                data["axleCount"] = self.axle_count
        return data

    @classmethod
    def _fields_from_dict(cls, stored: Dict[str, Any]) -> Dict[str, Any]:
        """Constructor keyword arguments for this variant from a stored dict."""
        kwargs = {
            "id": stored.get("id"),
            "brand": stored.get("brand"),
            "model": stored.get("model"),
            "year": stored.get("year"),
            "color": stored.get("color"),
            "status": stored.get("status") or DEFAULT_STATUS,
        }
        match cls.variant_tag:
            case "SportsCar":
                kwargs["door_count"] = stored.get("doorCount")
                kwargs["top_speed"] = stored.get("topSpeed")
            case "Car":
                kwargs["door_count"] = stored.get("doorCount")
            case "Truck":
                kwargs["cargo_capacity"] = stored.get("cargoCapacity")
                kwargs["axle_count"] = stored.get("axleCount")
        return kwargs

    @classmethod
    def from_dict(cls, stored: Any) -> Optional["Vehicle"]:
        """
        Rebuild a vehicle of this variant from its stored form.

        Returns None (and logs) if the entry is not an object, its
        variantTag does not match this class, or the fields are invalid.
        Maintenance records that fail to rebuild are dropped.
        """
        if not isinstance(stored, dict):
            logger.warning("Skipping vehicle entry that is not an object: %r", stored)
            return None
        if stored.get("variantTag") != cls.variant_tag:
            logger.warning(
                "Skipping vehicle entry: expected variantTag %r, got %r",
                cls.variant_tag,
                stored.get("variantTag"),
            )
            return None
        try:
            vehicle = cls(**cls._fields_from_dict(stored))
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning("Skipping invalid %s entry %r: %s", cls.variant_tag, stored.get("id"), e)
            return None

        history = stored.get("maintenanceHistory")
        if isinstance(history, list):
            for item in history:
                record = MaintenanceRecord.from_dict(item)
                if record is not None:
                    vehicle.maintenance_history.append(record)
            vehicle._sort_history()
        elif history is not None:
            logger.warning("Ignoring maintenanceHistory of %s: not a list", vehicle.id)
        return vehicle


class Car(Vehicle):
    """A passenger car."""

    variant_tag = "Car"

    def __init__(
        self,
        id: str,
        brand: str,
        model: str,
        year: int,
        color: str,
        door_count: int,
        status: str = DEFAULT_STATUS,
    ):
        super().__init__(id, brand, model, year, color, status)
        self.door_count = _require_count("door count", door_count)


class SportsCar(Car):
    """A car with a rated top speed (km/h)."""

    variant_tag = "SportsCar"

    def __init__(
        self,
        id: str,
        brand: str,
        model: str,
        year: int,
        color: str,
        door_count: int,
        top_speed: float,
        status: str = DEFAULT_STATUS,
    ):
        super().__init__(id, brand, model, year, color, door_count, status)
        self.top_speed = _require_number("top speed", top_speed)


class Truck(Vehicle):
    """A truck with cargo capacity (tonnes) and axle count."""

    variant_tag = "Truck"

    def __init__(
        self,
        id: str,
        brand: str,
        model: str,
        year: int,
        color: str,
        cargo_capacity: float,
        axle_count: int,
        status: str = DEFAULT_STATUS,
    ):
        super().__init__(id, brand, model, year, color, status)
        self.cargo_capacity = _require_number("cargo capacity", cargo_capacity, allow_zero=True)
        self.axle_count = _require_count("axle count", axle_count)


VARIANTS: Dict[str, Type[Vehicle]] = {
    cls.variant_tag: cls for cls in (Vehicle, Car, SportsCar, Truck)
}


def create_vehicle(variant_tag: str, **fields: Any) -> Vehicle:
    """Build a vehicle of the given variant. Raises ValidationError on bad input."""
    cls = VARIANTS.get(variant_tag)
    if cls is None:
        raise ValidationError(f"Unknown vehicle type: {variant_tag!r}")
    try:
        return cls(**fields)
    except TypeError as e:
        raise ValidationError(f"Invalid fields for {variant_tag}: {e}") from e
