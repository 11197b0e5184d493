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
"""Discriminator: classifies opaque values into registered variants.

Two entry points:

classify(value)
    Evaluates each variant predicate in registration order and returns
    Matched for the first one that holds (earlier registration wins ties),
    or Unmatched when none does.

guard(value, predicate)
    Narrowing by guard, the way an ``if (isFish(pet)) ... else ...`` narrows
    ``pet``. If the guard holds, the variants it admits are worked out from
    the predicate's structure: exactly one admitted variant gives Matched
    (without re-checking that variant's own predicate), several give
    Residual, none gives Unmatched. For a two-variant union the else branch
    ``negate(is_fish)`` therefore narrows to Bird; for larger unions it only
    rules Fish out.

The discriminator freezes its registry. It keeps no mutable state of its
own, so concurrent calls from several threads are safe; the optional
metrics collector is internally locked.

Example:
    >>> registry = VariantRegistry()
    >>> registry.register("Number", IS_NUMBER, {"repeat": lambda n, s=" ": s * n})
    >>> registry.register("String", IS_STRING, ["upper"])
    >>> d = Discriminator(registry)
    >>> narrow(d.classify(4)).repeat()
    '    '
"""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

from ..observability.collector import MATCHED, RESIDUAL, UNMATCHED, MetricsCollector
from ..predicates.base import Predicate
from .config import DEFAULT_CONFIG, DiscriminatorConfig
from .errors import PredicateEvaluationError
from .registry import VariantRegistry
from .result import (
    ClassificationResult,
    EvaluationState,
    Matched,
    Residual,
    Transition,
    Unmatched,
)
from .variant import Variant
from .view import NarrowedView, narrow

logger = logging.getLogger(__name__)


class Discriminator:
    """Classifies values against a frozen VariantRegistry.

    Attributes:
        registry: The (frozen) registry of variants
        config: Discriminator configuration
        collector: Metrics collector, if any
    """

    def __init__(
        self,
        registry: VariantRegistry,
        config: Optional[DiscriminatorConfig] = None,
        collector: Optional[MetricsCollector] = None,
    ):
        self._registry = registry.freeze()
        self._variants = registry.all()
        self._config = config or DEFAULT_CONFIG
        if collector is None and self._config.collect_metrics:
            collector = MetricsCollector()
        self._collector = collector

    @property
    def registry(self) -> VariantRegistry:
        return self._registry

    @property
    def config(self) -> DiscriminatorConfig:
        return self._config

    @property
    def collector(self) -> Optional[MetricsCollector]:
        return self._collector

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, value: Any) -> ClassificationResult:
        """Classify a value into the first variant whose predicate holds.

        Args:
            value: The opaque value to classify

        Returns:
            Matched for the first matching variant, Unmatched otherwise

        Raises:
            PredicateEvaluationError: If a predicate raises and errors are
                not suppressed
        """
        start = time.perf_counter()
        trace = self._start_trace()

        for index, variant in enumerate(self._variants):
            self._step(trace, Transition(EvaluationState.EVALUATING, index))
            if self._evaluate(variant.predicate, value, variant.name):
                self._step(trace, Transition(EvaluationState.MATCHED))
                logger.debug(f"Classified {value!r} as '{variant.name}' (index {index})")
                result = Matched(variant.name, self._view(value, variant), index, self._freeze(trace))
                self._record(MATCHED, variant.name, index + 1, start)
                return result

        self._step(trace, Transition(EvaluationState.UNMATCHED))
        logger.debug(f"No variant matched {value!r} after {len(self._variants)} predicates")
        self._record(UNMATCHED, None, len(self._variants), start)
        return Unmatched(self._freeze(trace))

    def guard(self, value: Any, predicate: Predicate) -> ClassificationResult:
        """Narrow a value through a guard predicate.

        Args:
            value: The opaque value
            predicate: Guard to apply, typically a variant predicate or a
                combination of them (``negate(is_fish)``, ``p | q``)

        Returns:
            Matched if the guard pins down a single variant, Residual if it
            leaves several candidates, Unmatched if the guard fails or
            admits no variant. Guards unrelated to the registered variants
            fall back to ``classify(value)``.
        """
        start = time.perf_counter()
        if not self._evaluate(predicate, value, None):
            logger.debug(f"Guard {predicate.describe()} does not hold for {value!r}")
            self._record(UNMATCHED, None, 1, start)
            return Unmatched()

        admitted = predicate.admits(self._variants)
        if admitted is None:
            logger.debug(f"Guard {predicate.describe()} admits no known variants; classifying")
            return self.classify(value)

        candidates = [v for v in self._variants if v.name in admitted]
        if len(candidates) == 1:
            variant = candidates[0]
            logger.debug(f"Guard {predicate.describe()} narrowed {value!r} to '{variant.name}'")
            self._record(MATCHED, variant.name, 1, start)
            return Matched(variant.name, self._view(value, variant), self._variants.index(variant))

        if not candidates:
            self._record(UNMATCHED, None, 1, start)
            return Unmatched()

        names = tuple(v.name for v in candidates)
        excluded = frozenset(v.name for v in self._variants) - admitted
        capabilities, operations = self._registry.common_capabilities(names)
        logger.debug(
            f"Guard {predicate.describe()} left {len(names)} candidates for {value!r}: {names}"
        )
        self._record(RESIDUAL, None, 1, start)
        return Residual(
            excluded=excluded,
            candidates=names,
            view=NarrowedView(value, None, capabilities, operations),
        )

    def narrow(self, result: ClassificationResult) -> NarrowedView:
        """Alias for the module-level ``narrow``."""
        return narrow(result)

    def union_view(self, value: Any) -> NarrowedView:
        """View of a not-yet-narrowed value.

        Exposes only the capabilities every registered variant shares, which
        are the only ones safe to use without narrowing first.
        """
        capabilities, operations = self._registry.common_capabilities()
        return NarrowedView(value, None, capabilities, operations)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _evaluate(self, predicate: Predicate, value: Any, variant: Optional[str]) -> bool:
        try:
            return bool(predicate.test(value))
        except Exception as e:
            if self._collector is not None:
                self._collector.record_predicate_error(variant, e)
            if self._config.suppress_predicate_errors:
                logger.warning(f"Predicate {predicate.describe()} failed, treating as no match: {e}")
                return False
            raise PredicateEvaluationError(predicate, variant, e) from e

    @staticmethod
    def _view(value: Any, variant: Variant) -> NarrowedView:
        return NarrowedView(value, variant.name, variant.capabilities, variant.operations)

    def _start_trace(self) -> Optional[List[Transition]]:
        if not self._config.trace:
            return None
        return [Transition(EvaluationState.START)]

    @staticmethod
    def _step(trace: Optional[List[Transition]], transition: Transition) -> None:
        if trace is not None:
            trace.append(transition)

    @staticmethod
    def _freeze(trace: Optional[List[Transition]]) -> tuple:
        return tuple(trace) if trace is not None else ()

    def _record(self, outcome: str, variant: Optional[str], evaluations: int, start: float) -> None:
        if self._collector is None:
            return
        latency_ms = (time.perf_counter() - start) * 1000
        self._collector.record_outcome(outcome, variant, evaluations, latency_ms)

    def __repr__(self) -> str:
        return f"Discriminator({self._registry!r})"
