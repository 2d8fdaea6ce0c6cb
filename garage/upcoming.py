"""UpcomingMaintenance dataclass for fleet-wide appointment reminders."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .maintenance_record import MaintenanceRecord


@dataclass
class UpcomingMaintenance:
    """A future maintenance record paired with its vehicle."""

    vehicle_id: str
    vehicle_label: str
    record: "MaintenanceRecord"
    summary: str

    @property
    def reminder(self) -> str:
        return f"{self.vehicle_label}: {self.summary}"
