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
"""Discriminator configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DiscriminatorConfig:
    """Configuration for a Discriminator.

    Attributes:
        trace: Record state machine transitions on every result.
        suppress_predicate_errors: Treat a predicate that raises as a
            non-match (logged as a warning) instead of raising
            PredicateEvaluationError.
        collect_metrics: Create a MetricsCollector when none is supplied.
    """

    trace: bool = False
    suppress_predicate_errors: bool = False
    collect_metrics: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DiscriminatorConfig":
        """Build a config from a plain dict, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = DiscriminatorConfig()
