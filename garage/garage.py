"""Garage class - the aggregate owning the fleet and its persistence."""

import logging
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from .calculations import is_due_soon, lead_window_end, local_now, start_of_today
from .codec import decode_fleet, encode_fleet
from .errors import (
    CorruptDataError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .maintenance_record import MaintenanceRecord
from .outcome import LoadReport, Outcome
from .upcoming import UpcomingMaintenance
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "garage"
DEFAULT_MAX_CAPACITY = 10


class Garage:
    """
    Bounded collection of vehicles, unique by id.

    The garage is the only writer to storage: every successful mutation
    writes the full fleet under one key.
    """

    def __init__(
        self,
        store,
        max_capacity: int = DEFAULT_MAX_CAPACITY,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        if isinstance(max_capacity, bool) or not isinstance(max_capacity, int) or max_capacity <= 0:
            raise ValidationError(f"Invalid max capacity: {max_capacity!r}")
        store.check_key(storage_key)
        self.store = store
        self.max_capacity = max_capacity
        self.storage_key = storage_key
        self._vehicles: List[Vehicle] = []

    def __len__(self) -> int:
        return len(self._vehicles)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(tuple(self._vehicles))

    @property
    def is_full(self) -> bool:
        return len(self._vehicles) >= self.max_capacity

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_vehicles(self) -> Tuple[Vehicle, ...]:
        """All vehicles, in insertion order."""
        return tuple(self._vehicles)

    def find_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def upcoming_maintenance(
        self, lead_days: int = 7, now: Optional[datetime] = None
    ) -> List[UpcomingMaintenance]:
        """
        Future records due within `lead_days`, across all vehicles.

        A record is due when start_of_today < date <= now + lead_days.
        Order follows the vehicles, then each vehicle's history.
        """
        now = now if now is not None else local_now()
        lead_window_end(lead_days, now)  # validates lead_days
        upcoming = []
        for vehicle in self._vehicles:
            for record in vehicle.maintenance_history:
                if is_due_soon(record.date, lead_days, now):
                    upcoming.append(self._pair(vehicle, record, now))
        return upcoming

    def scheduled_maintenance(self, now: Optional[datetime] = None) -> List[UpcomingMaintenance]:
        """Every future record across the fleet, soonest first."""
        now = now if now is not None else local_now()
        cutoff = start_of_today(now)
        scheduled = [
            self._pair(vehicle, record, now)
            for vehicle in self._vehicles
            for record in vehicle.maintenance_history
            if record.date > cutoff
        ]
        scheduled.sort(key=lambda u: u.record.date)
        return scheduled

    @staticmethod
    def _pair(vehicle: Vehicle, record: MaintenanceRecord, now: datetime) -> UpcomingMaintenance:
        return UpcomingMaintenance(
            vehicle_id=vehicle.id,
            vehicle_label=vehicle.label,
            record=record,
            summary=record.format(now),
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_vehicle(self, vehicle: Vehicle) -> Outcome:
        """Add a vehicle if there is room and its id is not taken."""
        if not isinstance(vehicle, Vehicle):
            return self._fail(ValidationError(f"Not a vehicle: {vehicle!r}"))
        if self.is_full:
            return self._fail(
                ValidationError(f"Garage is full ({self.max_capacity} vehicles)")
            )
        if self.find_vehicle(vehicle.id) is not None:
            return self._fail(
                ValidationError(f"Vehicle with ID {vehicle.id} already exists in the garage")
            )
        self._vehicles.append(vehicle)
        logger.info("Added %s %s", vehicle.variant_tag, vehicle.id)
        return self._commit(f"Vehicle {vehicle.brand} {vehicle.model} (ID: {vehicle.id}) added")

    def remove_vehicle(self, vehicle_id: str) -> Outcome:
        """Remove a vehicle and its maintenance history."""
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None:
            return self._fail(NotFoundError(f"Vehicle {vehicle_id} not found"))
        self._vehicles.remove(vehicle)
        logger.info("Removed vehicle %s", vehicle_id)
        return self._commit(f"Vehicle {vehicle_id} removed")

    def update_vehicle_status(self, vehicle_id: str, status: str) -> Outcome:
        """Change a vehicle's free-text status."""
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None:
            return self._fail(NotFoundError(f"Vehicle {vehicle_id} not found"))
        try:
            vehicle.set_status(status)
        except ValidationError as e:
            return self._fail(e)
        logger.info("Vehicle %s status set to %r", vehicle_id, vehicle.status)
        return self._commit(f"Vehicle {vehicle_id} status set to {vehicle.status}")

    def add_maintenance_to_vehicle(self, vehicle_id: str, record: MaintenanceRecord) -> Outcome:
        """Add a maintenance record to a vehicle."""
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None:
            return self._fail(NotFoundError(f"Vehicle {vehicle_id} not found"))
        if not vehicle.add_maintenance(record):
            return self._fail(ValidationError(f"Invalid maintenance record for {vehicle_id}"))
        logger.info("Added maintenance %s to %s", record.id, vehicle_id)
        return self._commit(f"Maintenance for {vehicle_id} saved")

    def remove_maintenance_from_vehicle(self, vehicle_id: str, record_id: str) -> Outcome:
        """Remove a maintenance record from a vehicle."""
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None:
            return self._fail(NotFoundError(f"Vehicle {vehicle_id} not found"))
        if not vehicle.remove_maintenance(record_id):
            return self._fail(
                NotFoundError(f"Maintenance record {record_id} not found for {vehicle_id}")
            )
        logger.info("Removed maintenance %s from %s", record_id, vehicle_id)
        return self._commit("Maintenance record removed")

    def _fail(self, error) -> Outcome:
        logger.debug("Garage operation failed: %s", error)
        return Outcome(ok=False, message=str(error), error=error)

    def _commit(self, message: str) -> Outcome:
        error = self.persist()
        if error is not None:
            return Outcome(ok=True, message=f"{message}, but it could not be saved: {error}", error=error)
        return Outcome(ok=True, message=message)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def persist(self) -> Optional[PersistenceError]:
        """
        Write the full fleet to storage.

        Returns None on success, or the PersistenceError. The in-memory
        fleet is unchanged either way.
        """
        try:
            payload = encode_fleet(self._vehicles)
            self.store.set(self.storage_key, payload)
        except PersistenceError as e:
            logger.error("Error saving garage data: %s", e)
            return e
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving garage data: %s", e)
            return PersistenceError(str(e))
        logger.debug("Saved %d vehicle(s) under %r", len(self._vehicles), self.storage_key)
        return None

    def load(self) -> LoadReport:
        """
        Replace the in-memory fleet with the stored one.

        - No stored entry: empty fleet
        - Invalid entries: skipped, the rest load
        - Corrupt payload: empty fleet, stored entry purged
        - Read failure: empty fleet, storage left untouched
        """
        try:
            payload = self.store.get(self.storage_key)
        except PersistenceError as e:
            logger.error("Error reading garage data: %s", e)
            self._vehicles = []
            return LoadReport(error=e)

        if payload is None:
            logger.debug("No saved garage data under %r", self.storage_key)
            self._vehicles = []
            return LoadReport()

        try:
            vehicles, skipped = decode_fleet(payload)
        except CorruptDataError as e:
            logger.error("Corrupt garage data under %r, clearing it: %s", self.storage_key, e)
            self._vehicles = []
            try:
                self.store.remove(self.storage_key)
            except PersistenceError as remove_error:
                logger.error("Could not clear corrupt garage data: %s", remove_error)
            return LoadReport(corrupt=True, error=e)

        self._vehicles = vehicles
        logger.debug("Loaded %d vehicle(s), skipped %d", len(vehicles), skipped)
        return LoadReport(loaded=len(vehicles), skipped=skipped)
