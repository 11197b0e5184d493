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
"""Variant: one alternative shape within a union of value shapes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, Optional, Union

from immutables import Map as ImmutableMap

from ..predicates.base import Predicate

# Either a plain list of capability names, or names mapped to operations
CapabilitySpec = Union[Iterable[str], Mapping[str, Optional[Callable[..., Any]]]]


@dataclass(frozen=True, eq=False)
class Variant:
    """A named shape with its discriminating predicate and capability set.

    Capabilities are the fields and operations a value of this variant is
    guaranteed to provide. Most capabilities are read straight off the
    value; ``operations`` holds the ones the variant supplies itself, as
    callables taking the value as their first argument.

    Identity is the name: two variants with the same name are equal.

    Attributes:
        name: Unique name within a registry
        predicate: Discriminating predicate
        capabilities: Declared capability names
        operations: Variant-supplied operations (subset of capabilities)
        description: Optional human-readable description
    """

    name: str
    predicate: Predicate
    capabilities: FrozenSet[str] = frozenset()
    operations: ImmutableMap = field(default_factory=ImmutableMap)
    description: str = ""

    @classmethod
    def build(
        cls,
        name: str,
        predicate: Predicate,
        capabilities: CapabilitySpec = (),
        description: str = "",
    ) -> Variant:
        """Build a variant from a capability list or a name -> operation mapping.

        A mapping value of None declares a capability that is read from the
        value rather than supplied by the variant.
        """
        if isinstance(capabilities, Mapping):
            names = frozenset(capabilities)
            operations = ImmutableMap(
                {k: op for k, op in capabilities.items() if op is not None}
            )
        else:
            if isinstance(capabilities, str):
                raise TypeError("capabilities must be an iterable of names, not a string")
            names = frozenset(capabilities)
            operations = ImmutableMap()
        return cls(name, predicate, names, operations, description)

    def supports(self, capability: str) -> bool:
        return capability in self.capabilities

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variant):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        caps = ", ".join(sorted(self.capabilities))
        return f"Variant({self.name}: {self.predicate.describe()} {{{caps}}})"
