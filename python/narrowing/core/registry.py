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
"""Variant registry: the static description of a union's variants.

The registry is built once at configuration time and then frozen. Variants
are kept in insertion order, which is the order the discriminator evaluates
their predicates in and therefore decides ties.

The name index uses the ``immutables`` persistent map, so ``all()`` and
``snapshot()`` hand out views that later registrations cannot disturb.

Example:
    >>> registry = VariantRegistry()
    >>> registry.register("Fish", has("swim"), ["swim", "layEggs"])
    >>> registry.register("Bird", has("fly"), ["fly", "layEggs"])
    >>> registry.alias("Pet", "Fish")
    >>> [v.name for v in registry.all()]
    ['Fish', 'Bird']
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from immutables import Map as ImmutableMap

from ..predicates.base import Predicate
from ..predicates.combinators import all_of
from .errors import DuplicateVariant, RegistryFrozen, UnknownVariant
from .variant import CapabilitySpec, Variant

logger = logging.getLogger(__name__)


class VariantRegistry:
    """Ordered, name-unique collection of variants.

    Attributes:
        frozen: Whether the registry still accepts registrations
    """

    def __init__(self) -> None:
        self._index: ImmutableMap = ImmutableMap()
        self._aliases: ImmutableMap = ImmutableMap()
        self._order: Tuple[Variant, ...] = ()
        self._frozen = False

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
        self,
        name: str,
        predicate: Predicate,
        capabilities: CapabilitySpec = (),
        description: str = "",
    ) -> Variant:
        """Add a variant.

        Args:
            name: Unique variant name
            predicate: Discriminating predicate
            capabilities: Capability names, or a mapping of names to
                variant-supplied operations
            description: Optional description

        Returns:
            The registered Variant

        Raises:
            DuplicateVariant: If the name is already a variant or alias
            RegistryFrozen: If the registry has been frozen
        """
        self._check_mutable(f"register variant '{name}'")
        self._check_unused(name)
        variant = Variant.build(name, predicate, capabilities, description)
        self._add(variant)
        return variant

    def register_intersection(
        self,
        name: str,
        parts: Iterable[str],
        description: str = "",
    ) -> Variant:
        """Add a variant that is the intersection of existing variants.

        The new variant's predicate is the conjunction of the parts'
        predicates; its capabilities and operations are the union of theirs.
        Later parts win when two parts supply the same operation.

        Raises:
            UnknownVariant: If a part is not registered
            ValueError: If fewer than two parts are given
        """
        self._check_mutable(f"register intersection '{name}'")
        self._check_unused(name)
        members = [self.get(part) for part in parts]
        if len(members) < 2:
            raise ValueError("an intersection needs at least two parts")

        capabilities: FrozenSet[str] = frozenset().union(*(m.capabilities for m in members))
        operations = ImmutableMap()
        for member in members:
            operations = operations.update(member.operations)

        variant = Variant(
            name=name,
            predicate=all_of(*(m.predicate for m in members)),
            capabilities=capabilities,
            operations=operations,
            description=description or " & ".join(m.name for m in members),
        )
        self._add(variant)
        return variant

    def alias(self, alias_name: str, target: str) -> None:
        """Give an existing variant another name.

        An alias never creates a new variant: it is absent from ``all()``
        and classification reports the target's name.
        """
        self._check_mutable(f"alias '{alias_name}'")
        self._check_unused(alias_name)
        canonical = self.resolve(target)
        self._aliases = self._aliases.set(alias_name, canonical)
        logger.debug(f"Aliased '{alias_name}' -> '{canonical}'")

    def freeze(self) -> VariantRegistry:
        """Make the registry read-only. Idempotent.

        Also freezes what the variant predicates read, such as the type
        hierarchies behind nominal predicates, so classification cannot
        change after this point.
        """
        if not self._frozen:
            for variant in self._order:
                variant.predicate.freeze()
            self._frozen = True
            logger.debug(f"Froze variant registry with {len(self._order)} variants")
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def all(self) -> Tuple[Variant, ...]:
        """Return the registered variants in insertion order."""
        return self._order

    def names(self) -> Tuple[str, ...]:
        return tuple(v.name for v in self._order)

    def resolve(self, name: str) -> str:
        """Return the canonical variant name for a name or alias."""
        if name in self._index:
            return name
        if name in self._aliases:
            return self._aliases[name]
        raise UnknownVariant(name)

    def get(self, name: str) -> Variant:
        """Look up a variant by name or alias.

        Raises:
            UnknownVariant: If no such variant or alias exists
        """
        return self._index[self.resolve(name)]

    def position(self, name: str) -> int:
        """Return the evaluation index of a variant."""
        target = self.get(name)
        return self._order.index(target)

    def aliases(self) -> ImmutableMap:
        return self._aliases

    def snapshot(self) -> ImmutableMap:
        """Return the current name -> Variant index."""
        return self._index

    def common_capabilities(
        self, names: Optional[Iterable[str]] = None
    ) -> Tuple[FrozenSet[str], ImmutableMap]:
        """Capabilities safely usable on any of the given variants.

        A capability is common when every variant declares it. If the
        variants supply different operations for it, the implementation
        depends on which variant the value really is, so it is left out.

        Args:
            names: Variants to intersect (default: all registered)

        Returns:
            (capability names, shared operations)
        """
        members = [self.get(n) for n in names] if names is not None else list(self._order)
        if not members:
            return frozenset(), ImmutableMap()

        common = frozenset.intersection(*(m.capabilities for m in members))
        operations = {}
        for capability in common:
            supplied = [m.operations.get(capability) for m in members]
            if all(op is None for op in supplied):
                continue
            first = supplied[0]
            if all(op is first for op in supplied):
                operations[capability] = first
            else:
                common = common - {capability}
        return common, ImmutableMap(operations)

    def __contains__(self, name: object) -> bool:
        return name in self._index or name in self._aliases

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._order)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"VariantRegistry([{', '.join(self.names())}], {state})"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_mutable(self, operation: str) -> None:
        if self._frozen:
            raise RegistryFrozen(operation)

    def _check_unused(self, name: str) -> None:
        if name in self:
            raise DuplicateVariant(name)

    def _add(self, variant: Variant) -> None:
        self._index = self._index.set(variant.name, variant)
        self._order = self._order + (variant,)
        logger.debug(f"Registered variant {variant!r} at index {len(self._order) - 1}")
