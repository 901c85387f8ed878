"""
Tests for the ps-based process source.
"""

import logging
from decimal import Decimal
from unittest.mock import patch

import pytest

from procmonitor.models import RawSnapshot
from procmonitor.sources.posix_ps import PosixPsSource
from procmonitor.validation import CommandSourceError, HeaderParseError


def _by_pid(observations):
    return {o.pid: o for o in observations}


@pytest.mark.unit
class TestPosixPsParsing:
    """Test cases for parsing ps output."""

    def test_linux_output(self, linux_ps_output):
        source = PosixPsSource()
        observations = _by_pid(source.parse_snapshot(RawSnapshot.from_text("ps", linux_ps_output)))

        assert len(observations) == 6
        java = observations[100]
        assert java.name == "java"
        assert java.cpu_percent == Decimal("1.5")
        assert java.mem_percent == Decimal("2.0")
        assert java.absolute_memory_bytes == Decimal("1048576")
        assert observations[101].absolute_memory_bytes == Decimal("2097152")
        assert observations[200].absolute_memory_bytes == Decimal("4096")

    def test_command_with_spaces_and_slashes(self, linux_ps_output):
        source = PosixPsSource()
        observations = _by_pid(source.parse_snapshot(RawSnapshot.from_text("ps", linux_ps_output)))

        assert observations[300].name == "Web Content"
        assert observations[12].name == "kworker/0:1"

    def test_macos_output_uses_basename(self, macos_ps_output):
        source = PosixPsSource()
        observations = _by_pid(source.parse_snapshot(RawSnapshot.from_text("ps", macos_ps_output)))

        assert observations[1].name == "launchd"
        assert observations[412].name == "Safari"
        assert observations[412].absolute_memory_bytes == Decimal("256000000")

    def test_bad_lines_are_skipped(self, caplog):
        output = "\n".join([
            "  PID %CPU %MEM   RSS COMMAND",
            "  abc  1.0  1.0    10 broken",
            "   7",
            "  500  x.y  1.0    10 partial",
            "  501  1.0  1.0    10 good",
        ])
        source = PosixPsSource()
        with caplog.at_level(logging.WARNING):
            observations = _by_pid(source.parse_snapshot(RawSnapshot.from_text("ps", output)))

        assert set(observations) == {500, 501}
        assert observations[500].cpu_percent is None
        assert observations[500].mem_percent == Decimal("1.0")
        assert "abc" in caplog.text

    def test_empty_command_gives_no_name(self):
        output = "  PID %CPU %MEM   RSS COMMAND\n  600  0.0  0.0     0\n"
        source = PosixPsSource()
        observations = source.parse_snapshot(RawSnapshot.from_text("ps", output))

        assert len(observations) == 1
        assert observations[0].name is None

    def test_missing_column_raises(self):
        output = "  PID %CPU   RSS COMMAND\n    1  0.0   100 init\n"
        source = PosixPsSource()

        with pytest.raises(HeaderParseError):
            source.parse_snapshot(RawSnapshot.from_text("ps", output))

    def test_command_not_last_raises(self):
        output = "  PID COMMAND %CPU %MEM RSS\n"
        source = PosixPsSource()

        with pytest.raises(HeaderParseError):
            source.parse_snapshot(RawSnapshot.from_text("ps", output))


@pytest.mark.unit
class TestPosixPsCommand:
    """Test cases for running ps."""

    @patch("procmonitor.sources.base.run_command")
    def test_read_observations_runs_ps_with_c_locale(self, mock_run, linux_ps_output):
        mock_run.return_value = (0, linux_ps_output, "")

        observations = PosixPsSource(timeout=5).read_observations()

        assert len(observations) == 6
        args, kwargs = mock_run.call_args
        assert args[0][0] == "ps"
        assert kwargs["env"] == {"LC_ALL": "C"}
        assert kwargs["timeout"] == 5

    @patch("procmonitor.sources.base.run_command")
    def test_non_zero_exit_raises(self, mock_run):
        mock_run.return_value = (1, "", "ps: illegal option")

        with pytest.raises(CommandSourceError) as exc_info:
            PosixPsSource().fetch_raw()

        assert exc_info.value.return_code == 1
        assert "illegal option" in str(exc_info.value)

    @patch("procmonitor.sources.base.run_command")
    def test_empty_output_raises(self, mock_run):
        mock_run.return_value = (0, "  \n", "")

        with pytest.raises(CommandSourceError):
            PosixPsSource().fetch_raw()
