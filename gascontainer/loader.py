"""
YAML configuration loader with schema validation.

Loads container, server and driver settings from a YAML file and
validates against a JSON schema.
"""

import yaml
import json
from dataclasses import fields
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import AppConfig, ContainerConfig, ServerConfig, DriverConfig


# Packaged data (default config and schemas)
DATA_ROOT = Path(__file__).parent / "data"
DEFAULT_SCHEMA_DIR = DATA_ROOT / "schemas"
DEFAULT_CONFIG_PATH = DATA_ROOT / "container.yaml"


class ConfigLoadError(Exception):
    """Raised when configuration loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    if not file_path.exists():
        raise ConfigLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"YAML parse error in {file_path}: {e}")

    # Empty file is an empty config
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional (custom schema dirs may omit it)
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ConfigLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON schema {schema_path}: {e}")


def _build_section(cls, data: dict, section: str):
    """Construct a config dataclass, rejecting unknown keys"""
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigLoadError(f"Unknown keys in '{section}': {', '.join(unknown)}")
    return cls(**data)


def check_limit_ordering(container: ContainerConfig):
    """
    Require implosion < pressure < upper pressure < explosion.

    Raises:
        ConfigLoadError: If the limits are out of order
    """
    ordered = (
        container.implosion_limit
        < container.pressure_limit
        < container.upper_pressure_limit
        < container.explosion_limit
    )
    if not ordered:
        raise ConfigLoadError(
            "Pressure limits must satisfy implosion < pressure < upper < explosion, got "
            f"{container.implosion_limit} / {container.pressure_limit} / "
            f"{container.upper_pressure_limit} / {container.explosion_limit}"
        )


def load_config(file_path: Optional[Path] = None, schema_dir: Optional[Path] = None) -> AppConfig:
    """Load application config from YAML

    No file_path returns the built-in defaults. Sections missing from the
    file take their defaults.
    """
    if file_path is None:
        config = AppConfig()
        check_limit_ordering(config.container)
        return config

    file_path = Path(file_path)
    data = load_yaml(file_path)

    # Validate against schema (the packaged schema must exist)
    if schema_dir is None:
        schema_path = DEFAULT_SCHEMA_DIR / "container.schema.json"
        if not schema_path.exists():
            raise ConfigLoadError(f"Packaged schema missing: {schema_path}")
    else:
        schema_path = Path(schema_dir) / "container.schema.json"
    validate_against_schema(data, schema_path, file_path)

    container = _build_section(ContainerConfig, data.get('container') or {}, 'container')
    server = _build_section(ServerConfig, data.get('server') or {}, 'server')
    driver = _build_section(DriverConfig, data.get('driver') or {}, 'driver')

    check_limit_ordering(container)
    if driver.min_mass_delta > driver.max_mass_delta:
        raise ConfigLoadError(
            f"driver.min_mass_delta ({driver.min_mass_delta}) exceeds "
            f"driver.max_mass_delta ({driver.max_mass_delta})"
        )

    return AppConfig(container=container, server=server, driver=driver)
