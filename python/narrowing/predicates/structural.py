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
"""Structural predicates: duck-typing checks on a named capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.values import has_capability
from .base import Predicate


@dataclass(frozen=True)
class StructuralPredicate(Predicate):
    """Matches values that carry ``capability`` with a non-None value.

    Works on attributes of objects and keys of dicts alike, so both
    ``Instance("Fish", {"swim": ...})`` and ``{"swim": ...}`` pass
    ``StructuralPredicate("swim")``.
    """

    capability: str

    def test(self, value: Any) -> bool:
        return has_capability(value, self.capability)

    def describe(self) -> str:
        return f"x.{self.capability} !== undefined"


def has(capability: str) -> StructuralPredicate:
    """Shorthand for ``StructuralPredicate(capability)``."""
    return StructuralPredicate(capability)
