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
"""Observability for classification: outcome counts and latencies.

Example:
    >>> from narrowing.observability import MetricsCollector
    >>> collector = MetricsCollector()
    >>> discriminator = Discriminator(registry, collector=collector)
    >>> discriminator.classify(4)
    >>> print(collector.get_summary())
"""

from .collector import MATCHED, RESIDUAL, UNMATCHED, MetricsCollector
from .metrics import ClassificationMetrics, LatencyMetrics

__all__ = [
    "MetricsCollector",
    "ClassificationMetrics",
    "LatencyMetrics",
    "MATCHED",
    "UNMATCHED",
    "RESIDUAL",
]
