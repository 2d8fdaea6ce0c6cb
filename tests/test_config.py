#!/usr/bin/env python3
"""Tests for config loading and schema validation."""

import pytest

from garage import Config, ValidationError, load_config
import garage.config
from garage.config import load_schema, read_config_file, validate_config_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert schema["type"] == "object"
        assert "maxCapacity" in schema["properties"]
        assert "leadDays" in schema["properties"]


class TestValidateConfigFile:
    """Tests for validate_config_file function."""

    def test_valid_returns_no_errors(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("""
storageDir: /var/lib/garage
storageKey: fleet
maxCapacity: 25
leadDays: 14
logLevel: INFO
""")
        assert validate_config_file(path, load_schema()) == []

    def test_empty_file_is_valid(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("")
        assert validate_config_file(path, load_schema()) == []

    def test_bad_value_returns_errors(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("maxCapacity: 0\n")
        errors = validate_config_file(path, load_schema())
        assert any("Schema validation" in e for e in errors)
        assert any("maxCapacity" in e for e in errors)

    def test_unknown_key_returns_errors(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("capacity: 5\n")
        assert validate_config_file(path, load_schema())

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("maxCapacity: [unclosed\n")
        errors = validate_config_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_config_file(tmp_path / "missing.yaml", load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("Error")

    @pytest.mark.parametrize("key", [".", "..", "a/b", ""])
    def test_storage_key_must_be_plain_name(self, tmp_path, key):
        path = tmp_path / "garage.yaml"
        path.write_text(f"storageKey: '{key}'\n")
        assert validate_config_file(path, load_schema())

    def test_dotted_storage_key_is_valid(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("storageKey: fleet.v2\n")
        assert validate_config_file(path, load_schema()) == []

    def test_read_returns_data_and_errors(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("maxCapacity: 3\n")
        assert read_config_file(path, load_schema()) == ({"maxCapacity": 3}, [])


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_file_gives_defaults(self):
        assert load_config() == Config()

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("maxCapacity: 3\nleadDays: 2\n")
        config = load_config(path)
        assert config.max_capacity == 3
        assert config.lead_days == 2
        assert config.storage_key == "garage"
        assert config.storage_dir == "data"

    def test_invalid_file_raises(self, tmp_path):
        path = tmp_path / "garage.yaml"
        path.write_text("leadDays: -3\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_file_is_parsed_once(self, tmp_path, monkeypatch):
        path = tmp_path / "garage.yaml"
        path.write_text("storageKey: fleet\n")
        schema = load_schema()
        real_safe_load = garage.config.yaml.safe_load
        calls = []

        def counting_safe_load(stream):
            calls.append(stream)
            return real_safe_load(stream)

        monkeypatch.setattr(garage.config, "load_schema", lambda: schema)
        monkeypatch.setattr(garage.config.yaml, "safe_load", counting_safe_load)
        assert load_config(path).storage_key == "fleet"
        assert len(calls) == 1
