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
"""Runtime tags for opaque values.

Values handed to the discriminator are ordinary Python objects. This module
derives the two discriminants the predicates compare against:

- the primitive tag, as reported by ``typeof`` (number, string, boolean,
  symbol, plus the non-guardable undefined, function and object)
- the nominal tag, an explicit type name carried by the value itself

Nominal tags are explicit on purpose: ``Instance`` objects carry their type
name, and any other object may declare one via ``__nominal_type__``. Python
class identity is not consulted.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class TypeTag(Enum):
    """Primitive tags usable in a ``typeof`` guard.

    This is a closed set. Other ``typeof`` results (undefined, function,
    object) exist at runtime but cannot act as guards.
    """

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, s: str) -> Optional["TypeTag"]:
        """Parse a tag string, returning None for unrecognized tags."""
        try:
            return cls(s)
        except ValueError:
            return None


_symbol_ids = itertools.count(1)


class Symbol:
    """A unique, immutable primitive with an optional description.

    Two symbols are never equal unless they are the same object, even when
    their descriptions match.
    """

    __slots__ = ("description", "_id")

    def __init__(self, description: Optional[str] = None):
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "_id", next(_symbol_ids))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Symbol is immutable")

    def __repr__(self) -> str:
        return f"Symbol({self.description or ''})"


@dataclass(frozen=True)
class Instance:
    """A value constructed as a nominal type.

    Attributes:
        type_name: The nominal type this value was constructed as
        fields: Field values, readable as attributes
    """

    type_name: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def __nominal_type__(self) -> str:
        return self.type_name

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails
        if name.startswith("__") or name == "fields":
            raise AttributeError(name)
        try:
            return self.fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __hash__(self) -> int:
        return hash((self.type_name, tuple(sorted(self.fields))))


def typeof(value: Any) -> str:
    """Return the runtime tag of a value.

    bool is checked before int so that True is "boolean", never "number".
    """
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return TypeTag.BOOLEAN.value
    if isinstance(value, (int, float)):
        return TypeTag.NUMBER.value
    if isinstance(value, str):
        return TypeTag.STRING.value
    if isinstance(value, Symbol):
        return TypeTag.SYMBOL.value
    if callable(value) and not isinstance(value, type):
        return "function"
    return "object"


def is_primitive(value: Any) -> bool:
    """True for undefined and the guardable primitives (number, string, boolean, symbol)."""
    return value is None or TypeTag.parse(typeof(value)) is not None


def nominal_tag_of(value: Any) -> Optional[str]:
    """Return the explicit nominal type name of a value, if it declares one."""
    if isinstance(value, Instance):
        return value.type_name
    tag = getattr(value, "__nominal_type__", None)
    if isinstance(tag, str):
        return tag
    return None


def has_capability(value: Any, name: str) -> bool:
    """Check that a named capability is present and not None.

    Mappings expose capabilities as keys, other objects as attributes.
    """
    if isinstance(value, dict):
        return value.get(name) is not None
    if value is None:
        return False
    return getattr(value, name, None) is not None


def read_capability(value: Any, name: str) -> Any:
    """Read a named capability from a value (key for mappings, else attribute)."""
    if isinstance(value, dict):
        return value[name]
    return getattr(value, name)
