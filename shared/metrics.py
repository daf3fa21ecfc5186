"""
Shared metrics configuration for the fact matching engine.
"""

from typing import Dict, Any, Optional
import threading

from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry


class MetricsCollector:
    """Prometheus metrics for ruleset evaluation.

    Metrics are only registered when a registry is given, so any number of
    collectors can coexist in one process.
    """

    def __init__(self, namespace: str = "fact_matching", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up ruleset metrics."""
        self._metrics["ruleset_evaluations_total"] = Counter(
            "ruleset_evaluations_total",
            "Total ruleset evaluations",
            ["result"],
            namespace=self.namespace,
            registry=self.registry
        )

        self._metrics["ruleset_evaluation_duration_seconds"] = Histogram(
            "ruleset_evaluation_duration_seconds",
            "Ruleset evaluation duration in seconds",
            namespace=self.namespace,
            registry=self.registry
        )

        self._metrics["ruleset_matches"] = Histogram(
            "ruleset_matches",
            "Number of tied rules at the winning specificity",
            buckets=(0, 1, 2, 3, 5, 8, 13, 21),
            namespace=self.namespace,
            registry=self.registry
        )

        self._metrics["ruleset_rules"] = Gauge(
            "ruleset_rules",
            "Number of rules held by rulesets on this collector",
            namespace=self.namespace,
            registry=self.registry
        )

    def record_evaluation(self, matched: int, duration: float):
        """Record one evaluate_all pass."""
        result = "matched" if matched else "no_match"
        with self._lock:
            self._metrics["ruleset_evaluations_total"].labels(result=result).inc()
            self._metrics["ruleset_evaluation_duration_seconds"].observe(duration)
            self._metrics["ruleset_matches"].observe(matched)

    def adjust_rule_count(self, delta: int):
        """Add or remove rules from the running total across rulesets."""
        if delta >= 0:
            self._metrics["ruleset_rules"].inc(delta)
        else:
            self._metrics["ruleset_rules"].dec(-delta)
