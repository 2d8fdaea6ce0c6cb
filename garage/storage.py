"""Key-value storage collaborators for persisting the garage."""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Minimal string key-value storage.

    Values are opaque UTF-8 strings. No transactional guarantees across calls.
    """

    def check_key(self, key: str) -> None:
        """Raise ValidationError if this store cannot hold `key`."""
        if not isinstance(key, str) or not key:
            raise ValidationError("Storage key is required")

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store a value. Raises PersistenceError on failure."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process dict-backed store."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStore(KeyValueStore):
    """Store each key as `<key>.json` in a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File path for a key. Keys must be plain names."""
        if not isinstance(key, str) or not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValidationError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def check_key(self, key: str) -> None:
        self.path_for(key)

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as fp:
                return fp.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as fp:
                fp.write(value)
        except OSError as e:
            raise PersistenceError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %d characters to %s", len(value), path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PersistenceError(f"Could not remove {path}: {e}") from e
