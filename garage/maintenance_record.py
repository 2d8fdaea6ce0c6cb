"""MaintenanceRecord class for service events and appointments."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .calculations import DateInput, check_schedule, local_now, to_local_datetime
from .errors import ValidationError
from .status import ScheduleStatus

logger = logging.getLogger(__name__)


def new_record_id() -> str:
    """Generate a random 128-bit record id."""
    return uuid.uuid4().hex


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class MaintenanceRecord:
    """A service performed on, or scheduled for, a vehicle."""

    def __init__(
            self,
            date: DateInput,
            service_type: str,
            cost: float,
            description: Optional[str] = "",
            record_id: Optional[str] = None,
    ):
        if not isinstance(service_type, str) or not service_type.strip():
            raise ValidationError("Service type is required")
        if not _is_number(cost) or not cost >= 0:
            raise ValidationError(f"Invalid cost: {cost!r} (must be a number >= 0)")
        if description is not None and not isinstance(description, str):
            raise ValidationError(f"Invalid description: {description!r}")

        self._date = to_local_datetime(date)
        self._service_type = service_type.strip()
        self._cost = cost
        self._description = (description or "").strip()
        self._id = record_id or new_record_id()

    @property
    def id(self) -> str:
        return self._id

    @property
    def date(self) -> datetime:
        return self._date

    @property
    def service_type(self) -> str:
        return self._service_type

    @property
    def cost(self) -> float:
        return self._cost

    @property
    def description(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"<MaintenanceRecord {self.id} {self.service_type!r} {self.date.isoformat()}>"

    def schedule_status(
        self, lead_days: int = 7, now: Optional[datetime] = None
    ) -> ScheduleStatus:
        """Classify this record as done, due soon, or scheduled."""
        return check_schedule(self.date, lead_days, now)

    def format(self, now: Optional[datetime] = None) -> str:
        """
        Human-readable summary, e.g. 'Oil change on 2025-01-15 - $150.00 (synthetic)'.

        Future appointments get the time of day appended.
        """
        now = now if now is not None else local_now()
        text = f"{self.service_type} on {self.date:%Y-%m-%d}"
        if self.cost > 0:
            text += f" - ${self.cost:,.2f}"
        if self.description:
            text += f" ({self.description})"
        if self.date > now:
            text += f" at {self.date:%H:%M}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored dict format (camelCase keys, UTC ISO date)."""
        return {
            "id": self.id,
            "date": self.date.astimezone(timezone.utc).isoformat(),
            "serviceType": self.service_type,
            "cost": self.cost,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, stored: Any) -> Optional["MaintenanceRecord"]:
        """
        Rebuild a record from its stored form.

        Returns None (and logs) when the entry is malformed. A missing id
        is regenerated.
        """
        if not isinstance(stored, dict):
            logger.warning("Skipping maintenance record that is not an object: %r", stored)
            return None
        missing = [k for k in ("date", "serviceType", "cost") if k not in stored]
        if missing:
            logger.warning(
                "Skipping maintenance record missing %s: %r", ", ".join(missing), stored
            )
            return None
        try:
            return cls(
                stored["date"],
                stored["serviceType"],
                stored["cost"],
                stored.get("description") or "",
                record_id=stored.get("id") or None,
            )
        except (ValidationError, TypeError, ValueError, OverflowError) as e:
            logger.warning("Skipping invalid maintenance record %r: %s", stored, e)
            return None
