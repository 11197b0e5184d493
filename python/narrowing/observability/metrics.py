# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Metric data structures for classification.

These are plain accumulators; thread safety is the collector's job.
"""

from __future__ import annotations

import statistics
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict


@dataclass
class LatencyMetrics:
    """Latency observations in milliseconds.

    Only the most recent ``max_history`` observations are kept for the
    statistics; ``observations`` counts every one recorded.
    """

    max_history: int = 1000
    observations: int = 0
    latencies_ms: Deque[float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.latencies_ms = deque(maxlen=self.max_history)

    def record(self, latency_ms: float) -> None:
        self.latencies_ms.append(latency_ms)
        self.observations += 1

    @property
    def count(self) -> int:
        return len(self.latencies_ms)

    @property
    def mean_ms(self) -> float:
        return statistics.mean(self.latencies_ms) if self.latencies_ms else 0.0

    @property
    def median_ms(self) -> float:
        return statistics.median(self.latencies_ms) if self.latencies_ms else 0.0

    def percentile(self, p: float) -> float:
        """Calculate percentile (0-100)."""
        if not self.latencies_ms:
            return 0.0
        sorted_vals = sorted(self.latencies_ms)
        k = (len(sorted_vals) - 1) * (p / 100.0)
        f = int(k)
        c = f + 1 if f + 1 < len(sorted_vals) else f
        return sorted_vals[f] + (sorted_vals[c] - sorted_vals[f]) * (k - f)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "observations": self.observations,
            "mean_ms": round(self.mean_ms, 4),
            "median_ms": round(self.median_ms, 4),
            "p99_ms": round(self.percentile(99), 4),
        }


@dataclass
class ClassificationMetrics:
    """Outcome counts for classify and guard calls.

    Attributes:
        matches_by_variant: Matched outcomes per variant name
        unmatched: Number of Unmatched outcomes
        residual: Number of Residual outcomes
        predicate_evaluations: Total predicates evaluated
        predicate_errors: Predicate failures per variant name
    """

    matches_by_variant: Dict[str, int] = field(default_factory=dict)
    unmatched: int = 0
    residual: int = 0
    predicate_evaluations: int = 0
    predicate_errors: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.matches_by_variant.values()) + self.unmatched + self.residual

    @property
    def match_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return sum(self.matches_by_variant.values()) / self.total

    @property
    def mean_evaluations(self) -> float:
        """Mean number of predicates evaluated per call."""
        if self.total == 0:
            return 0.0
        return self.predicate_evaluations / self.total

    def record_match(self, variant: str) -> None:
        self.matches_by_variant[variant] = self.matches_by_variant.get(variant, 0) + 1

    def record_error(self, variant: str) -> None:
        self.predicate_errors[variant] = self.predicate_errors.get(variant, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "matches_by_variant": dict(self.matches_by_variant),
            "unmatched": self.unmatched,
            "residual": self.residual,
            "match_rate": round(self.match_rate, 4),
            "mean_evaluations": round(self.mean_evaluations, 2),
            "predicate_errors": dict(self.predicate_errors),
        }
