"""Tests for the benchmark aggregator."""

import threading

import pytest

from moviemodeling.service.modeling.benchmark import BenchmarkAggregator


class TestRecord:
    """Tests for BenchmarkAggregator.record."""

    def test_model_totals(self):
        benchmark = BenchmarkAggregator()

        benchmark.record("Point Read", 2.5, "Single")
        benchmark.record("SQL Query", 1.1, "Single")

        assert benchmark.model_total("Single") == pytest.approx(3.6)
        assert benchmark.cost("Single", "Point Read") == pytest.approx(2.5)
        assert benchmark.cost("Single", "SQL Query") == pytest.approx(1.1)
        assert benchmark.point_reads == 1
        assert benchmark.sql_queries == 1
        assert benchmark.total_cost == pytest.approx(3.6)

    def test_model_names_case_insensitive(self):
        benchmark = BenchmarkAggregator()

        benchmark.record("Point Read", 1.0, "single")
        benchmark.record("Point Read", 2.0, "SINGLE")

        assert benchmark.cost("Single", "Point Read") == pytest.approx(3.0)

    def test_without_model_only_updates_counters(self):
        benchmark = BenchmarkAggregator()

        benchmark.record("SQL Query", 4.0)

        assert benchmark.sql_queries == 1
        assert benchmark.total_cost == pytest.approx(4.0)
        assert all(benchmark.model_total(model) == 0 for model in benchmark.model_names)

    def test_unknown_model_costs_zero(self):
        benchmark = BenchmarkAggregator()
        assert benchmark.cost("Hybrid", "Point Read") == 0.0
        assert benchmark.model_total("Hybrid") == 0.0

    def test_concurrent_records_not_lost(self):
        benchmark = BenchmarkAggregator()

        def worker():
            for _ in range(500):
                benchmark.record("Point Read", 1.0, "Embedded")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert benchmark.point_reads == 4000
        assert benchmark.cost("Embedded", "Point Read") == pytest.approx(4000.0)


class TestClear:
    def test_clear_resets_everything(self):
        benchmark = BenchmarkAggregator()
        benchmark.record("Point Read", 2.5, "Single")

        benchmark.clear()

        assert benchmark.point_reads == 0
        assert benchmark.sql_queries == 0
        assert benchmark.total_cost == 0.0
        assert benchmark.model_total("Single") == 0.0

    def test_clear_model_costs_keeps_counters(self):
        benchmark = BenchmarkAggregator()
        benchmark.record("Point Read", 2.5, "Single")

        benchmark.clear_model_costs()

        assert benchmark.point_reads == 1
        assert benchmark.total_cost == pytest.approx(2.5)
        assert benchmark.model_total("Single") == 0.0


class TestObservers:
    def test_observers_notified_on_changes(self):
        benchmark = BenchmarkAggregator()
        seen = []
        benchmark.subscribe(lambda b: seen.append(b.point_reads))

        benchmark.record("Point Read", 1.0, "Single")
        benchmark.record("Point Read", 1.0, "Single")
        benchmark.clear()

        assert seen == [1, 2, 0]

    def test_unsubscribe(self):
        benchmark = BenchmarkAggregator()
        seen = []

        def observer(_):
            seen.append(1)

        benchmark.subscribe(observer)
        benchmark.unsubscribe(observer)
        benchmark.record("Point Read", 1.0)

        assert seen == []

    def test_observer_errors_propagate(self):
        benchmark = BenchmarkAggregator()

        def broken(_):
            raise RuntimeError("observer failed")

        benchmark.subscribe(broken)

        with pytest.raises(RuntimeError, match="observer failed"):
            benchmark.record("Point Read", 1.0, "Single")
        # The record itself was applied before notification
        assert benchmark.point_reads == 1


class TestSnapshot:
    def test_snapshot_uses_canonical_names(self):
        benchmark = BenchmarkAggregator()
        benchmark.record("SQL Query", 3.456, "hybrid")

        snapshot = benchmark.snapshot()

        assert list(snapshot.model_costs) == ["Single", "Embedded", "Reference", "Hybrid"]
        assert snapshot.model_costs["Hybrid"]["SQL Query"] == pytest.approx(3.456)
        assert snapshot.model_costs["Single"] == {"SQL Query": 0.0, "Point Read": 0.0}
        assert snapshot.to_dict()["total_cost"] == 3.46
