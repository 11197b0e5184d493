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
"""User-defined type guards: arbitrary boolean functions used as predicates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .base import Predicate


@dataclass(frozen=True)
class GuardPredicate(Predicate):
    """Wraps a callable ``fn(value) -> bool``.

    Two guard predicates are equal only if they wrap the same function
    object, so registering a guard and later negating the same guard lets
    the discriminator see they refer to the same variant.
    """

    fn: Callable[[Any], bool]
    name: str = field(default="", compare=False)

    def test(self, value: Any) -> bool:
        return bool(self.fn(value))

    def describe(self) -> str:
        label = self.name or getattr(self.fn, "__name__", "guard")
        return f"{label}(x)"


def guard(fn: Callable[[Any], bool], name: str = "") -> GuardPredicate:
    """Wrap a type-guard function; usable as a decorator."""
    return GuardPredicate(fn, name or getattr(fn, "__name__", ""))
