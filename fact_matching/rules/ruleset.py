"""
Ruleset: specificity-ranked rule selection with random tie-break.
"""

import random
import time
from functools import lru_cache
from typing import Any, Dict, Generic, Iterable, List, Optional

from prometheus_client import REGISTRY

from shared.config import get_config
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from .query import Query
from .rule import Outcome, Rule


def get_random_source() -> random.Random:
    """Build a tie-break source, seeded from configuration when set."""
    return random.Random(get_config().random_seed)


@lru_cache(maxsize=1)
def get_ruleset_metrics() -> Optional[MetricsCollector]:
    """Process-wide collector on the default registry, if metrics are enabled."""
    if not get_config().enable_metrics:
        return None
    return MetricsCollector(registry=REGISTRY)


class Ruleset(Generic[Outcome]):
    """Rules kept sorted by descending specificity.

    Equal-specificity rules keep their insertion order: rules passed to the
    constructor in the given order, appended rules after existing ones.
    """

    def __init__(self, rules: Iterable[Rule[Outcome]] = (),
                 rng: Optional[random.Random] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.logger = get_logger("fact_matching.ruleset")
        self.rules: List[Rule[Outcome]] = list(rules)
        self.rng = rng if rng is not None else get_random_source()
        self.metrics = metrics if metrics is not None else get_ruleset_metrics()
        self._sort()
        if self.metrics:
            self.metrics.adjust_rule_count(len(self.rules))
        self.logger.info("Ruleset created", rules=len(self.rules))

    def _sort(self):
        """Sort by descending specificity."""
        # Stable with reverse=True, so ties stay in insertion order
        self.rules.sort(key=lambda r: r.specificity, reverse=True)

    def append(self, ruleset: "Ruleset[Outcome]") -> None:
        """Move every rule of ``ruleset`` into this one, leaving it empty."""
        if ruleset is self:
            return

        moved = len(ruleset.rules)
        self.rules.extend(ruleset.rules)
        ruleset.rules.clear()
        self._sort()
        if ruleset.metrics:
            ruleset.metrics.adjust_rule_count(-moved)
        if self.metrics:
            self.metrics.adjust_rule_count(moved)
        self.logger.info("Ruleset appended", moved=moved, rules=len(self.rules))

    def evaluate_all(self, query: Query) -> List[Rule[Outcome]]:
        """Return every matching rule at the highest matching specificity."""
        start_time = time.perf_counter()
        matched: List[Rule[Outcome]] = []

        for rule in self.rules:
            # Sorted order: once below the winning tier, nothing else can win
            if matched and rule.specificity < matched[0].specificity:
                break
            if rule.evaluate(query):
                matched.append(rule)

        if self.metrics:
            self.metrics.record_evaluation(len(matched), time.perf_counter() - start_time)

        self.logger.debug(
            "Ruleset evaluated",
            facts=len(query),
            matched=len(matched),
            specificity=matched[0].specificity if matched else None
        )

        return matched

    def evaluate(self, query: Query, rng: Optional[random.Random] = None) -> Optional[Rule[Outcome]]:
        """Pick one of the winning-tier matches uniformly at random."""
        matched = self.evaluate_all(query)
        if not matched:
            return None
        return (rng if rng is not None else self.rng).choice(matched)

    def get_stats(self) -> Dict[str, Any]:
        """Get ruleset statistics."""
        tiers: Dict[int, int] = {}
        for rule in self.rules:
            tiers[rule.specificity] = tiers.get(rule.specificity, 0) + 1
        return {
            "total_rules": len(self.rules),
            "specificity_tiers": tiers,
        }

    def __len__(self) -> int:
        return len(self.rules)
