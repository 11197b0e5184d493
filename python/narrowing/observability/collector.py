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
"""Thread-safe metrics collection for discriminators."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .metrics import ClassificationMetrics, LatencyMetrics

logger = logging.getLogger(__name__)

# Outcome labels passed to record_outcome
MATCHED = "matched"
UNMATCHED = "unmatched"
RESIDUAL = "residual"


@dataclass
class MetricsCollector:
    """Central collector for classification metrics.

    A discriminator is safe to call from many threads, so the collector
    guards its accumulators with a lock. Alert callbacks fire on predicate
    errors, outside the lock so they may read the collector; a failing
    callback is logged and otherwise ignored.

    Attributes:
        max_history: Maximum number of latency observations to keep
    """

    max_history: int = 1000
    _classification: ClassificationMetrics = field(default_factory=ClassificationMetrics)
    _latency: LatencyMetrics = field(init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock)
    _alert_callbacks: List[Callable[[str, Dict[str, Any]], None]] = field(
        default_factory=list
    )

    def __post_init__(self) -> None:
        self._latency = LatencyMetrics(max_history=self.max_history)

    def record_outcome(
        self,
        outcome: str,
        variant: Optional[str] = None,
        evaluations: int = 0,
        latency_ms: Optional[float] = None,
    ) -> None:
        """Record one classification outcome.

        Args:
            outcome: MATCHED, UNMATCHED or RESIDUAL
            variant: Matched variant name (MATCHED only)
            evaluations: Number of predicates evaluated
            latency_ms: Call latency in milliseconds
        """
        with self._lock:
            if outcome == MATCHED and variant is not None:
                self._classification.record_match(variant)
            elif outcome == RESIDUAL:
                self._classification.residual += 1
            else:
                self._classification.unmatched += 1
            self._classification.predicate_evaluations += evaluations
            if latency_ms is not None:
                self._latency.record(latency_ms)

    def record_predicate_error(self, variant: Optional[str], error: BaseException) -> None:
        with self._lock:
            self._classification.record_error(variant or "<guard>")
            callbacks = list(self._alert_callbacks)
        self._trigger_alert(
            callbacks,
            "predicate_error",
            {"variant": variant, "error": str(error)},
        )

    def register_alert_callback(
        self, callback: Callable[[str, Dict[str, Any]], None]
    ) -> None:
        """Register a callback ``fn(alert_type, data)``."""
        with self._lock:
            self._alert_callbacks.append(callback)

    @staticmethod
    def _trigger_alert(
        callbacks: List[Callable[[str, Dict[str, Any]], None]],
        alert_type: str,
        data: Dict[str, Any],
    ) -> None:
        """Trigger alert callbacks (called without the lock held)."""
        for callback in callbacks:
            try:
                callback(alert_type, data)
            except Exception as e:
                logger.warning(f"Alert callback error: {e}")

    def get_classification_metrics(self) -> ClassificationMetrics:
        with self._lock:
            return self._classification

    def get_latency_metrics(self) -> LatencyMetrics:
        with self._lock:
            return self._latency

    def get_summary(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "classification": self._classification.to_dict(),
                "latency": self._latency.to_dict(),
            }

    def reset(self) -> None:
        with self._lock:
            self._classification = ClassificationMetrics()
            self._latency = LatencyMetrics(max_history=self.max_history)
