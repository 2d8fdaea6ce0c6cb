"""Result values returned by garage operations."""

from dataclasses import dataclass
from typing import Optional

from .errors import GarageError, PersistenceError


@dataclass
class Outcome:
    """Result of a garage mutation. Truthy on success."""

    ok: bool
    message: str
    error: Optional[GarageError] = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def persisted(self) -> bool:
        """False when the change succeeded in memory but could not be saved."""
        return self.ok and not isinstance(self.error, PersistenceError)


@dataclass
class LoadReport:
    """Summary of loading the fleet from storage."""

    loaded: int = 0
    skipped: int = 0
    corrupt: bool = False
    error: Optional[GarageError] = None

    @property
    def message(self) -> str:
        if self.corrupt:
            return "Saved garage data was corrupted and has been cleared. Starting with an empty garage."
        if self.error is not None:
            return f"Could not read saved garage data ({self.error}). Starting with an empty garage."
        text = f"Loaded {self.loaded} vehicle(s)"
        if self.skipped:
            text += f", skipped {self.skipped} invalid entr{'y' if self.skipped == 1 else 'ies'}"
        return text
