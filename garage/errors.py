"""Error types raised or reported by the garage core."""


class GarageError(Exception):
    """Base class for garage errors."""


class ValidationError(GarageError):
    """Invalid input to a constructor or operation."""


class NotFoundError(GarageError):
    """Lookup miss for a vehicle or maintenance record."""


class PersistenceError(GarageError):
    """Storage read or write failure."""


class CorruptDataError(GarageError):
    """Stored payload could not be parsed as a fleet."""
