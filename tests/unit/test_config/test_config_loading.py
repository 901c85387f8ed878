"""
Unit tests for configuration validation and loading.
"""

from pathlib import Path

import pytest

from procmonitor.config import (
    clear_config_cache,
    get_config,
    get_config_path,
    set_config_path,
    validate_monitor_config,
)
from procmonitor.config import manager
from procmonitor.validation import ValidationError


@pytest.fixture
def sample_monitor_data():
    """Sample [monitor] table for testing."""
    return {
        "memory_threshold_percent": 35,
        "display_by_pid": True,
        "exclude_processes": ["java", " idle "],
        "exclude_pids": [1, 2],
        "include_list_file": "pins.txt",
        "source": "psutil",
        "metric_prefix": "Custom Metrics|Procs",
        "interval_seconds": 30,
        "pin_over_threshold": False,
        "log_level": "debug",
    }


@pytest.mark.unit
class TestMonitorConfigValidation:
    """Test cases for validate_monitor_config."""

    def test_full_config(self, sample_monitor_data, temp_dir):
        config = validate_monitor_config(sample_monitor_data, temp_dir)

        assert config.memory_threshold_percent == 35
        assert config.display_by_pid is True
        assert config.exclude_processes == frozenset({"java", "idle"})
        assert config.exclude_pids == frozenset({1, 2})
        assert config.include_list_file == temp_dir / "pins.txt"
        assert config.source == "psutil"
        assert config.metric_prefix == "Custom Metrics|Procs"
        assert config.interval_seconds == 30.0
        assert config.pin_over_threshold is False
        assert config.log_level == "DEBUG"

    def test_defaults(self, temp_dir):
        config = validate_monitor_config({}, temp_dir)

        assert config.memory_threshold_percent is None
        assert config.display_by_pid is False
        assert config.exclude_processes == frozenset()
        assert config.exclude_pids == frozenset()
        assert config.include_list_file == temp_dir / ".monitored-processes"
        assert config.source == "auto"
        assert config.pin_over_threshold is True

    def test_zero_threshold_is_kept_as_configured(self, temp_dir):
        config = validate_monitor_config({"memory_threshold_percent": 0}, temp_dir)

        assert config.memory_threshold_percent == 0

    def test_absolute_include_file_is_kept(self, temp_dir):
        target = temp_dir / "elsewhere" / "pins"
        config = validate_monitor_config({"include_list_file": str(target)}, Path("/unused"))

        assert config.include_list_file == target

    @pytest.mark.parametrize(
        "key, value",
        [
            ("memory_threshold_percent", -1),
            ("memory_threshold_percent", 101),
            ("memory_threshold_percent", "lots"),
            ("memory_threshold_percent", True),
            ("memory_threshold_percent", 5.9),
            ("display_by_pid", "yes"),
            ("exclude_processes", "java"),
            ("exclude_processes", ["java", ""]),
            ("exclude_pids", ["one"]),
            ("exclude_pids", [-5]),
            ("exclude_pids", [1.5]),
            ("source", "wmic"),
            ("interval_seconds", 0),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_values(self, key, value, temp_dir):
        with pytest.raises(ValidationError) as exc_info:
            validate_monitor_config({key: value}, temp_dir)

        assert key in str(exc_info.value)


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the configuration singleton."""

    def test_load_from_file(self, temp_dir):
        config_file = temp_dir / "config.toml"
        config_file.write_text(
            "[monitor]\n"
            "memory_threshold_percent = 20\n"
            'exclude_processes = ["idle"]\n'
            'include_list_file = "state/pins"\n',
            encoding="utf-8",
        )
        set_config_path(config_file)

        config = get_config()

        assert config.memory_threshold_percent == 20
        assert config.exclude_processes == frozenset({"idle"})
        assert config.include_list_file == temp_dir / "state" / "pins"
        assert get_config() is config
        assert get_config_path() == config_file

    def test_missing_file_uses_defaults(self, temp_dir):
        set_config_path(temp_dir / "absent.toml")

        config = get_config()

        assert config.source == "auto"
        assert config.include_list_file == temp_dir / ".monitored-processes"

    def test_invalid_file_raises(self, temp_dir):
        config_file = temp_dir / "config.toml"
        config_file.write_text("[monitor]\nsource = 'wmic'\n", encoding="utf-8")
        set_config_path(config_file)

        with pytest.raises(ValidationError):
            get_config()

    def test_clear_cache(self, temp_dir):
        set_config_path(temp_dir / "absent.toml")
        first = get_config()
        clear_config_cache()

        assert get_config() is not first

    def test_default_path_is_under_working_directory(self, temp_dir, monkeypatch):
        (temp_dir / "conf").mkdir()
        (temp_dir / "conf" / "config.toml").write_text(
            "[monitor]\nmemory_threshold_percent = 42\n", encoding="utf-8"
        )
        monkeypatch.setattr(manager, "_CONFIG_FILE_PATH", None)
        monkeypatch.chdir(temp_dir)
        clear_config_cache()

        config = get_config()

        assert get_config_path() == Path.cwd() / "conf" / "config.toml"
        assert config.memory_threshold_percent == 42
        assert config.include_list_file == Path.cwd() / "conf" / ".monitored-processes"

    def test_shipped_config_is_valid(self):
        shipped = Path(__file__).parents[3] / "conf" / "config.toml"
        set_config_path(shipped)

        config = get_config()

        assert config.memory_threshold_percent == 5
        assert config.include_list_file == shipped.parent / ".monitored-processes"
