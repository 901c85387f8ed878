"""
Pytest configuration and shared fixtures for the procmonitor test suite.

This module provides common fixtures, sample command output, and
configuration for all test modules.
"""

import shutil
import sys
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def include_file(temp_dir):
    """Path of a not-yet-existing include-list file."""
    return temp_dir / ".monitored-processes"


@pytest.fixture
def linux_ps_output():
    """Output of `ps -e -o pid,pcpu,pmem,rss,comm` on Linux."""
    return "\n".join([
        "    PID %CPU %MEM   RSS COMMAND",
        "      1  0.0  0.1 11800 systemd",
        "     12  0.0  0.0     0 kworker/0:1",
        "    100  1.5  2.0  1024 java",
        "    101  2.5  3.0  2048 java",
        "    200  0.1  0.2     4 bash",
        "    300  0.3  0.4  8192 Web Content",
        "",
    ])


@pytest.fixture
def macos_ps_output():
    """Output of `ps -e -o pid,pcpu,pmem,rss,comm` on macOS."""
    return "\n".join([
        "  PID  %CPU %MEM    RSS COMM",
        "    1   0.0  0.1  12000 /sbin/launchd",
        "  412   3.2  1.5 250000 /Applications/Safari.app/Contents/MacOS/Safari",
        "",
    ])


@pytest.fixture
def tasklist_output():
    """Output of `tasklist /fo csv` on Windows."""
    return "\n".join([
        '"Image Name","PID","Session Name","Session#","Mem Usage"',
        '"System Idle Process","0","Services","0","8 K"',
        '"chrome.exe","4242","Console","1","102,400 K"',
        '"chrome.exe","4243","Console","1","51,200 K"',
        '"svchost.exe","880","Services","0","12,345 K"',
        "",
    ])


# ============================================================================
# Test Utilities
# ============================================================================


class StaticSource:
    """Process source returning fixed observations, or raising a given error."""

    name = "static"

    def __init__(self, observations: List = None, error: Exception = None, total_memory: int = None):
        self.observations = observations or []
        self.error = error
        self.total_memory = total_memory
        self.calls = 0

    def read_observations(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.observations)

    def total_memory_bytes(self):
        return self.total_memory


@pytest.fixture
def static_source():
    """Factory for StaticSource instances."""
    return StaticSource


@pytest.fixture
def java_bash_observations():
    """The three observations of the java/java/bash scenario."""
    from procmonitor.models import ProcessObservation

    return [
        ProcessObservation("java", 100, Decimal("1.5"), Decimal("2.0"), Decimal("1048576")),
        ProcessObservation("java", 101, Decimal("2.5"), Decimal("3.0"), Decimal("2097152")),
        ProcessObservation("bash", 200, Decimal("0.1"), Decimal("0.2"), Decimal("4096")),
    ]


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from procmonitor.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
