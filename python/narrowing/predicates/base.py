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
"""Base predicate abstraction.

A predicate is a pure boolean check over an opaque value. Predicates are
structural values: concrete predicates are frozen dataclasses, so two
predicates built the same way compare equal. The discriminator relies on
this to work out which variants a guard narrows to without re-evaluating
the variants' own predicates.

Predicates compose with the operators ``~p`` (negation), ``p & q``
(conjunction) and ``p | q`` (disjunction), mirroring the constraint
algebra's ``c1 & c2`` alias for meet.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, FrozenSet, Optional, Sequence

if TYPE_CHECKING:
    from ..core.variant import Variant


class Predicate(ABC):
    """Abstract base class for all predicates.

    Subclasses must implement ``test`` and ``describe``. Predicates must be
    pure and side-effect free with respect to the value; this is a contract,
    not something the library can enforce.
    """

    __slots__ = ()

    @abstractmethod
    def test(self, value: Any) -> bool:
        """Return True if the value satisfies this predicate."""
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable form, e.g. ``typeof x === "number"``."""
        raise NotImplementedError

    def admits(self, variants: Sequence[Variant]) -> Optional[FrozenSet[str]]:
        """Return the names of the variants this predicate narrows to.

        A predicate that is exactly some variant's discriminating predicate
        admits that variant. Compound predicates derive their answer from
        their operands. None means the predicate says nothing about the
        registered variants.

        The result is an upper bound: if the predicate holds, the value is
        one of the admitted variants. See ``admits_exactly`` for the
        stronger form negation needs.
        """
        direct = frozenset(v.name for v in variants if v.predicate == self)
        if direct:
            return direct
        return self._derive_admitted(variants)

    def admits_exactly(self, variants: Sequence[Variant]) -> Optional[FrozenSet[str]]:
        """Return S such that the predicate holds iff some predicate in S holds.

        None when no such set is known. Only an exact set may be
        complemented: ``not (g and is_fish)`` does not rule Fish out.
        """
        direct = frozenset(v.name for v in variants if v.predicate == self)
        if direct:
            return direct
        return self._derive_exact(variants)

    def _derive_admitted(self, variants: Sequence[Variant]) -> Optional[FrozenSet[str]]:
        return None

    def _derive_exact(self, variants: Sequence[Variant]) -> Optional[FrozenSet[str]]:
        return None

    def freeze(self) -> Predicate:
        """Freeze any shared state this predicate reads. Returns self."""
        return self

    def __call__(self, value: Any) -> bool:
        return self.test(value)

    def __invert__(self) -> Predicate:
        from .combinators import negate

        return negate(self)

    def __and__(self, other: Predicate) -> Predicate:
        from .combinators import and_

        return and_(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        from .combinators import or_

        return or_(self, other)

    def __str__(self) -> str:
        return self.describe()
