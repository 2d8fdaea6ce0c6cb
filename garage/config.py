"""Load and validate garage configuration files."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate

from .errors import ValidationError


@dataclass
class Config:
    """Runtime settings for the garage."""

    storage_dir: str = "data"
    storage_key: str = "garage"
    max_capacity: int = 10
    lead_days: int = 7
    log_level: str = "WARNING"


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def read_config_file(filepath: Path, schema: dict) -> Tuple[dict, List[str]]:
    """Load and validate a config YAML file. Returns (data, errors)."""
    data: dict = {}
    errors = []
    try:
        with open(filepath) as f:
            # An empty file means all defaults
            data = yaml.safe_load(f) or {}
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except SchemaValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return data, errors


def validate_config_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single config YAML file. Returns list of errors."""
    return read_config_file(filepath, schema)[1]


def load_config(filename: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration, falling back to defaults for missing keys.

    Raises ValidationError if the file is unreadable or fails the schema.
    """
    if filename is None:
        return Config()

    data, errors = read_config_file(Path(filename), load_schema())
    if errors:
        raise ValidationError(f"Invalid config {filename}: " + "; ".join(errors))

    defaults = Config()
    return Config(
        storage_dir=data.get("storageDir", defaults.storage_dir),
        storage_key=data.get("storageKey", defaults.storage_key),
        max_capacity=data.get("maxCapacity", defaults.max_capacity),
        lead_days=data.get("leadDays", defaults.lead_days),
        log_level=data.get("logLevel", defaults.log_level),
    )
