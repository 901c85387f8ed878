"""
Unit tests for the threshold policy, reportable selection and metric printing.
"""

import io
from decimal import Decimal

import pytest

from procmonitor.core.reporting import MetricPrinter, round_metric, select_reportable
from procmonitor.core.threshold import DEFAULT_MEMORY_THRESHOLD, ThresholdPolicy
from procmonitor.models import CycleReport, ProcessRecord


@pytest.mark.unit
class TestThresholdPolicy:
    """Test cases for ThresholdPolicy.effective_threshold."""

    def test_zero_falls_back_to_default(self):
        assert ThresholdPolicy(0).effective_threshold() == 100

    def test_unset_falls_back_to_default(self):
        assert ThresholdPolicy(None).effective_threshold() == DEFAULT_MEMORY_THRESHOLD

    @pytest.mark.parametrize("configured", [1, 35, 100])
    def test_positive_value_is_used(self, configured):
        assert ThresholdPolicy(configured).effective_threshold() == configured


def _record(key, count=1, cpu="1", mem="1", absolute="1048576"):
    return ProcessRecord(
        display_name=key,
        instance_count=count,
        cpu_percent=Decimal(cpu) if cpu is not None else None,
        mem_percent=Decimal(mem) if mem is not None else None,
        absolute_memory_bytes=Decimal(absolute) if absolute is not None else None,
    )


@pytest.mark.unit
class TestSelectReportable:
    """Test cases for the reportable-set rule."""

    def test_threshold_is_inclusive(self):
        records = {"a": _record("a", mem="5"), "b": _record("b", mem="4.99")}

        assert set(select_reportable(records, 5, frozenset())) == {"a"}

    def test_pinned_below_threshold_is_reported(self):
        records = {"a": _record("a", mem="0.1"), "b": _record("b", mem="0.1")}

        assert set(select_reportable(records, 50, frozenset({"b"}))) == {"b"}

    def test_missing_memory_only_reported_when_pinned(self):
        records = {"a": _record("a", mem=None), "b": _record("b", mem=None)}

        assert set(select_reportable(records, 1, frozenset({"a"}))) == {"a"}

    def test_pinned_raw_name_matches_escaped_key(self):
        record = _record("a\\|b", mem="0.1")
        record.process_name = "a|b"

        assert set(select_reportable({"a\\|b": record}, 50, frozenset({"a|b"}))) == {"a\\|b"}

    def test_pinned_raw_name_does_not_match_other_names(self):
        record = _record("a_b", mem="0.1")
        record.process_name = "a_b"

        assert select_reportable({"a_b": record}, 50, frozenset({"a|b"})) == {}

    def test_zero_instances_never_reported(self):
        records = {"a": _record("a", count=0, mem="90")}

        assert select_reportable(records, 1, frozenset({"a"})) == {}


@pytest.mark.unit
class TestMetricPrinter:
    """Test cases for metric line rendering."""

    def test_round_half_up(self):
        assert round_metric(Decimal("2.5")) == 3
        assert round_metric(Decimal("2.49")) == 2

    def test_print_report(self):
        report = CycleReport(
            reportable={
                "java": _record("java", count=2, cpu="4.0", mem="5.0", absolute="3145728"),
            },
            total_memory_bytes=8 * 1024 * 1024 * 1024,
        )
        stream = io.StringIO()
        printer = MetricPrinter("Custom Metrics|Process Monitor|", stream=stream)

        count = printer.print_report(report)

        assert stream.getvalue().splitlines() == [
            "name=Custom Metrics|Process Monitor|Memory|Total Memory (MB),value=8192",
            "name=Custom Metrics|Process Monitor|java|Number of running instances,value=2",
            "name=Custom Metrics|Process Monitor|java|CPU utilization in Percent,value=4",
            "name=Custom Metrics|Process Monitor|java|Memory Utilization in Percent,value=5",
            "name=Custom Metrics|Process Monitor|java|Memory Utilization Absolute (MB),value=3",
        ]
        assert count == 5

    def test_missing_metrics_are_omitted(self):
        report = CycleReport(reportable={"svc": _record("svc", cpu=None, mem="2", absolute=None)})
        printer = MetricPrinter("P", stream=io.StringIO())

        names = [name for name, _ in printer.metrics_for_report(report)]

        assert names == [
            "P|svc|Number of running instances",
            "P|svc|Memory Utilization in Percent",
        ]

    def test_records_sorted_by_key(self):
        report = CycleReport(reportable={"b": _record("b"), "a": _record("a")})
        printer = MetricPrinter("P", stream=io.StringIO())

        keys = [name.split("|")[1] for name, _ in printer.metrics_for_report(report)]

        assert keys == sorted(keys)
