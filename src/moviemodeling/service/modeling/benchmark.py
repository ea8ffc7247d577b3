"""Running cost statistics across many queries.

The aggregator is shared between concurrent requests, so every mutation holds
a single lock. Observers are called synchronously after each change, outside
the lock, and their exceptions propagate to the caller.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from moviemodeling.constants import MODEL_NAMES, POINT_READ, QUERY_KINDS

Observer = Callable[["BenchmarkAggregator"], None]


@dataclass(frozen=True)
class BenchmarkSnapshot:
    point_reads: int
    sql_queries: int
    total_cost: float
    model_costs: dict[str, dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "point_reads": self.point_reads,
            "sql_queries": self.sql_queries,
            "total_cost": round(self.total_cost, 2),
            "model_costs": self.model_costs,
        }


class BenchmarkAggregator:
    """Accumulates query counts and costs, overall and per (model, query kind)."""

    model_names = MODEL_NAMES
    query_kinds = QUERY_KINDS

    def __init__(self):
        self._lock = threading.Lock()
        self._observers: list[Observer] = []
        self.point_reads = 0
        self.sql_queries = 0
        self.total_cost = 0.0
        # lowercased model -> query kind -> cumulative cost
        self._model_costs: dict[str, dict[str, float]] = {}

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def record(self, query_kind: str, cost: float, model: str | None = None) -> None:
        """Record one successful query.

        Args:
            query_kind: "Point Read" or "SQL Query"
            cost: Cost reported for the query
            model: Data model the query ran against (optional)
        """
        with self._lock:
            if query_kind == POINT_READ:
                self.point_reads += 1
            else:
                self.sql_queries += 1
            self.total_cost += cost

            if model:
                kinds = self._model_costs.setdefault(model.lower(), {})
                kinds[query_kind] = kinds.get(query_kind, 0.0) + cost

        self._notify()

    def cost(self, model: str, query_kind: str) -> float:
        with self._lock:
            return self._model_costs.get(model.lower(), {}).get(query_kind, 0.0)

    def model_total(self, model: str) -> float:
        with self._lock:
            return sum(self._model_costs.get(model.lower(), {}).values())

    def clear(self) -> None:
        with self._lock:
            self.point_reads = 0
            self.sql_queries = 0
            self.total_cost = 0.0
            self._model_costs.clear()
        self._notify()

    def clear_model_costs(self) -> None:
        with self._lock:
            self._model_costs.clear()
        self._notify()

    def snapshot(self) -> BenchmarkSnapshot:
        """Copy the current counters and per-model table, keyed by canonical names."""
        with self._lock:
            model_costs = {}
            for model in self.model_names:
                kinds = self._model_costs.get(model.lower(), {})
                model_costs[model] = {kind: kinds.get(kind, 0.0) for kind in self.query_kinds}
            return BenchmarkSnapshot(
                point_reads=self.point_reads,
                sql_queries=self.sql_queries,
                total_cost=self.total_cost,
                model_costs=model_costs,
            )

    def _notify(self) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer(self)
