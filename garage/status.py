"""ScheduleStatus enum for maintenance record classification."""

from enum import Enum


class ScheduleStatus(Enum):
    """Maintenance record categories. Lower value = more urgent."""

    DUE_SOON = 1  # Future, inside the lead window
    SCHEDULED = 2  # Future, beyond the lead window
    DONE = 3  # Past or today
