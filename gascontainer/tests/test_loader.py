"""
Test: configuration loading

Verifies YAML -> Python dataclass conversion, schema validation and
limit ordering checks.
"""

import sys
import pytest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from gascontainer.loader import (
    ConfigLoadError,
    DEFAULT_CONFIG_PATH,
    DEFAULT_SCHEMA_DIR,
    load_config,
)
from gascontainer import loader
from gascontainer.data_types import AppConfig


def write_yaml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_defaults_without_file():
    config = load_config()

    assert config == AppConfig()
    assert config.container.initial_mass == 10.0
    assert config.container.initial_temperature == 293.0
    assert config.container.tick_interval_seconds == 2.0
    assert config.server.base_url == "http://127.0.0.1:5001/gasrpc"
    assert config.driver.pressure_threshold == 150.0


def test_load_shipped_config():
    """The packaged data/container.yaml matches the built-in defaults"""
    config = load_config(DEFAULT_CONFIG_PATH, DEFAULT_SCHEMA_DIR)

    print(f"[OK] Loaded config: container={config.container}")
    print(f"  Server: {config.server.base_url}")
    print(f"  Driver threshold: {config.driver.pressure_threshold}")

    assert config == AppConfig()


def test_partial_config(tmp_path):
    """Missing sections and keys take defaults"""
    path = write_yaml(tmp_path, """
container:
  tick_interval_seconds: 0.5
  seed: 99
server:
  port: 6001
""")
    config = load_config(path)

    assert config.container.tick_interval_seconds == 0.5
    assert config.container.seed == 99
    assert config.container.explosion_limit == 140.0
    assert config.server.port == 6001
    assert config.server.host == "127.0.0.1"
    assert config.driver.max_mass_delta == 4


def test_empty_file(tmp_path):
    path = write_yaml(tmp_path, "")
    assert load_config(path) == AppConfig()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="File not found"):
        load_config(tmp_path / "nope.yaml")


def test_yaml_parse_error(tmp_path):
    path = write_yaml(tmp_path, "container: [unclosed\n")
    with pytest.raises(ConfigLoadError, match="YAML parse error"):
        load_config(path)


def test_schema_violation(tmp_path):
    path = write_yaml(tmp_path, """
server:
  port: "not-a-port"
""")
    with pytest.raises(ConfigLoadError, match="Validation error"):
        load_config(path)


def test_unknown_key_rejected(tmp_path):
    """Caught by the schema, and by the dataclass check when no schema is present"""
    path = write_yaml(tmp_path, """
container:
  pressure_limt: 100.0
""")
    with pytest.raises(ConfigLoadError):
        load_config(path)

    with pytest.raises(ConfigLoadError, match="Unknown keys"):
        load_config(path, schema_dir=tmp_path / "no-schemas")


def test_limit_ordering(tmp_path):
    path = write_yaml(tmp_path, """
container:
  pressure_limit: 130.0
  upper_pressure_limit: 125.0
""")
    with pytest.raises(ConfigLoadError, match="implosion < pressure < upper < explosion"):
        load_config(path)


def test_mass_delta_range(tmp_path):
    path = write_yaml(tmp_path, """
driver:
  min_mass_delta: 5
  max_mass_delta: 2
""")
    with pytest.raises(ConfigLoadError, match="min_mass_delta"):
        load_config(path)


def test_schema_ships_inside_package():
    package_dir = Path(loader.__file__).parent

    assert DEFAULT_CONFIG_PATH.parent == package_dir / "data"
    assert (DEFAULT_SCHEMA_DIR / "container.schema.json").is_file()
    assert DEFAULT_CONFIG_PATH.is_file()


def test_missing_packaged_schema_is_an_error(tmp_path, monkeypatch):
    """Without the packaged schema the loader refuses rather than skipping validation"""
    monkeypatch.setattr(loader, "DEFAULT_SCHEMA_DIR", tmp_path / "gone")
    path = write_yaml(tmp_path, "container:\n  seed: 3\n")

    with pytest.raises(ConfigLoadError, match="schema missing"):
        load_config(path)


if __name__ == '__main__':
    print("=" * 60)
    print("Test: Configuration Loading")
    print("=" * 60)
    print()

    try:
        test_defaults_without_file()
        test_load_shipped_config()

    except Exception as e:
        print(f"\n[FAIL] Test failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    print("\n" + "=" * 60)
    print("All loader tests passed!")
    print("=" * 60)
