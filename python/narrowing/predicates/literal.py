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
"""Literal predicates: membership in a closed set of literal values.

Models string (and number/boolean) literal types such as
``"ease-in" | "ease-out" | "ease-in-out"``. A literal only matches values
with the same primitive tag, so ``True`` never matches the literal ``1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Tuple

from ..core.values import TypeTag, typeof
from .base import Predicate

_LITERAL_TAGS = frozenset({TypeTag.NUMBER.value, TypeTag.STRING.value, TypeTag.BOOLEAN.value})


def _format_literal(tag: str, value: Any) -> str:
    if tag == TypeTag.STRING.value:
        return f'"{value}"'
    if tag == TypeTag.BOOLEAN.value:
        return str(value).lower()
    return str(value)


@dataclass(frozen=True)
class LiteralPredicate(Predicate):
    """Matches values equal to one of ``values``."""

    values: FrozenSet[Tuple[str, Any]]

    def test(self, value: Any) -> bool:
        tag = typeof(value)
        if tag not in _LITERAL_TAGS:
            return False
        return (tag, value) in self.values

    def describe(self) -> str:
        ordered = sorted(self.values, key=lambda tv: (tv[0], str(tv[1])))
        return " | ".join(_format_literal(tag, v) for tag, v in ordered)


def literal(*values: Any) -> LiteralPredicate:
    """Build a literal predicate from number, string or boolean literals.

    Raises:
        ValueError: If a literal is not a number, string or boolean
    """
    tagged = set()
    for v in values:
        tag = typeof(v)
        if tag not in _LITERAL_TAGS:
            raise ValueError(f"{v!r} is not a number, string or boolean literal")
        tagged.add((tag, v))
    return LiteralPredicate(frozenset(tagged))
