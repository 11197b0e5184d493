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
"""Predicate combinators: negation, conjunction and disjunction.

Combinators are predicates themselves, and they also know which registered
variants they narrow to:

    negate(p)   admits the complement of what p admits, but only when p
                holds exactly for those variants (a variant predicate, or
                a disjunction of them)
    and_(p, q)  admits the intersection (or just one side, if the other
                side is unrelated to the registered variants)
    or_(p, q)   admits the union

A conjunction with an unrelated side is only an upper bound, so its
negation says nothing and the guard falls back to classification.

For a two-variant union the complement of one variant is exactly the other
variant, so the else branch of a guard narrows to it. With more variants the
complement only rules one out; the discriminator reports that as a
Residual rather than a match.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, FrozenSet, Optional, Sequence

from .base import Predicate


@dataclass(frozen=True)
class Negation(Predicate):
    operand: Predicate

    def test(self, value: Any) -> bool:
        return not self.operand.test(value)

    def describe(self) -> str:
        return f"!({self.operand.describe()})"

    def _derive_admitted(self, variants: Sequence) -> Optional[FrozenSet[str]]:
        # Only an exact set may be complemented
        inner = self.operand.admits_exactly(variants)
        if inner is None:
            return None
        return frozenset(v.name for v in variants) - inner

    def freeze(self) -> Predicate:
        self.operand.freeze()
        return self


@dataclass(frozen=True)
class Conjunction(Predicate):
    left: Predicate
    right: Predicate

    def test(self, value: Any) -> bool:
        return self.left.test(value) and self.right.test(value)

    def describe(self) -> str:
        return f"({self.left.describe()} && {self.right.describe()})"

    def _derive_admitted(self, variants: Sequence) -> Optional[FrozenSet[str]]:
        left = self.left.admits(variants)
        right = self.right.admits(variants)
        if left is None:
            return right
        if right is None:
            return left
        return left & right

    def freeze(self) -> Predicate:
        self.left.freeze()
        self.right.freeze()
        return self


@dataclass(frozen=True)
class Disjunction(Predicate):
    left: Predicate
    right: Predicate

    def test(self, value: Any) -> bool:
        return self.left.test(value) or self.right.test(value)

    def describe(self) -> str:
        return f"({self.left.describe()} || {self.right.describe()})"

    def _derive_admitted(self, variants: Sequence) -> Optional[FrozenSet[str]]:
        left = self.left.admits(variants)
        right = self.right.admits(variants)
        if left is None or right is None:
            return None
        return left | right

    def _derive_exact(self, variants: Sequence) -> Optional[FrozenSet[str]]:
        left = self.left.admits_exactly(variants)
        right = self.right.admits_exactly(variants)
        if left is None or right is None:
            return None
        return left | right

    def freeze(self) -> Predicate:
        self.left.freeze()
        self.right.freeze()
        return self


def negate(predicate: Predicate) -> Predicate:
    """Negate a predicate. Double negation collapses to the original."""
    if isinstance(predicate, Negation):
        return predicate.operand
    return Negation(predicate)


def and_(p1: Predicate, p2: Predicate) -> Predicate:
    return Conjunction(p1, p2)


def or_(p1: Predicate, p2: Predicate) -> Predicate:
    return Disjunction(p1, p2)


def all_of(*predicates: Predicate) -> Predicate:
    """Left-fold conjunction of one or more predicates."""
    if not predicates:
        raise ValueError("all_of() requires at least one predicate")
    return reduce(and_, predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """Left-fold disjunction of one or more predicates."""
    if not predicates:
        raise ValueError("any_of() requires at least one predicate")
    return reduce(or_, predicates)
