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
"""Nominal predicates: ``instanceof``-style checks against declared types.

Nominal membership is decided from explicit type tags carried by values
(see ``core.values.nominal_tag_of``) and a ``TypeHierarchy`` of declared
types, rather than from Python class identity.

A declared type may list its construction results. ``x instanceof Padder``
where constructing a Padder may yield a SpaceRepeatingPadder or a
StringPadder tests membership against that union of construction results,
not against Padder itself.

Example:
    >>> types = TypeHierarchy()
    >>> types.declare("SpaceRepeatingPadder")
    >>> types.declare("StringPadder")
    >>> types.declare("Padder", constructs=["SpaceRepeatingPadder", "StringPadder"])
    >>> NominalPredicate("StringPadder", types).test(Instance("SpaceRepeatingPadder"))
    False
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from ..core.errors import DuplicateVariant, RegistryFrozen, UnknownVariant
from ..core.values import nominal_tag_of
from .base import Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NominalType:
    """A declared nominal type.

    Attributes:
        name: Type name, compared against value tags
        bases: Names of the types this one derives from
        constructs: Names of the types a construction of this one may yield
    """

    name: str
    bases: Tuple[str, ...] = ()
    constructs: FrozenSet[str] = frozenset()


class TypeHierarchy:
    """Declared nominal types and their derivation edges.

    Declarations are accepted until the hierarchy is frozen; afterwards it is
    read-only and safe to share between threads.
    """

    def __init__(self) -> None:
        self._types: Dict[str, NominalType] = {}
        self._frozen = False

    def declare(
        self,
        name: str,
        bases: Iterable[str] = (),
        constructs: Iterable[str] = (),
    ) -> NominalType:
        """Declare a nominal type.

        Raises:
            DuplicateVariant: If the type is already declared
            RegistryFrozen: If the hierarchy is frozen
        """
        if self._frozen:
            raise RegistryFrozen(f"declare type '{name}'")
        if name in self._types:
            raise DuplicateVariant(name)
        declared = NominalType(name, tuple(bases), frozenset(constructs))
        self._types[name] = declared
        return declared

    def freeze(self) -> TypeHierarchy:
        if not self._frozen:
            self._frozen = True
            logger.debug(f"Froze type hierarchy with {len(self._types)} types")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[NominalType]:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def ancestors(self, name: str) -> FrozenSet[str]:
        """Return ``name`` and every type it derives from, transitively."""
        seen = {name}
        queue = deque([name])
        while queue:
            declared = self._types.get(queue.popleft())
            if declared is None:
                continue
            for base in declared.bases:
                if base not in seen:
                    seen.add(base)
                    queue.append(base)
        return frozenset(seen)

    def derives_from(self, name: str, target: str) -> bool:
        return target in self.ancestors(name)

    def instance_targets(self, target: str) -> FrozenSet[str]:
        """Types an ``instanceof target`` check tests membership against."""
        declared = self._types.get(target)
        if declared is None:
            raise UnknownVariant(target)
        if declared.constructs:
            return declared.constructs
        return frozenset({target})


@dataclass(frozen=True)
class NominalPredicate(Predicate):
    """Matches values whose nominal tag is, or derives from, ``target``."""

    target: str
    hierarchy: TypeHierarchy = field(repr=False)

    def __post_init__(self) -> None:
        if self.target not in self.hierarchy:
            raise UnknownVariant(self.target)

    def test(self, value: Any) -> bool:
        tag = nominal_tag_of(value)
        if tag is None:
            return False
        ancestors = self.hierarchy.ancestors(tag)
        return not ancestors.isdisjoint(self.hierarchy.instance_targets(self.target))

    def describe(self) -> str:
        return f"x instanceof {self.target}"

    def freeze(self) -> Predicate:
        self.hierarchy.freeze()
        return self
