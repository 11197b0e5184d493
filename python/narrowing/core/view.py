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
"""Narrowed views: capability-restricted handles on a classified value.

A NarrowedView is the single chokepoint through which narrowed code touches
a value. Only the capabilities declared for the matched variant are
reachable; anything else raises CapabilityNotAvailable. Capabilities are
resolved in this order:

1. an operation supplied by the variant, called as ``op(value, *args)``
2. a key of a dict value, or an attribute of any other value

When a callable capability returns the value itself (a fluent method), the
view returns itself instead, so chains like ``view.add(1).multiply(5)``
stay narrowed. Primitive values are never rewrapped: ``"x".strip()`` or an
identity operation on a string hands back the same object without being
a method chain, so the caller gets the plain value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Optional

from immutables import Map as ImmutableMap

from .errors import CapabilityNotAvailable, NotMatched
from .values import is_primitive, read_capability

if TYPE_CHECKING:
    from .result import ClassificationResult


class NarrowedView:
    """Read-only view exposing exactly one capability set of a value.

    View methods (``get``, ``invoke``, ``capabilities``...) take precedence
    over attribute-style access; use ``get(name)`` for a capability whose
    name collides with one of them.
    """

    __slots__ = ("_payload", "_variant", "_capabilities", "_operations")

    def __init__(
        self,
        payload: Any,
        variant: Optional[str],
        capabilities: FrozenSet[str],
        operations: Optional[ImmutableMap] = None,
    ):
        object.__setattr__(self, "_payload", payload)
        object.__setattr__(self, "_variant", variant)
        object.__setattr__(self, "_capabilities", frozenset(capabilities))
        object.__setattr__(self, "_operations", operations if operations is not None else ImmutableMap())

    @property
    def variant(self) -> Optional[str]:
        """Name of the narrowed variant, or None for a union-wide view."""
        return self._variant

    @property
    def capabilities(self) -> FrozenSet[str]:
        return self._capabilities

    def has(self, name: str) -> bool:
        return name in self._capabilities

    def get(self, name: str) -> Any:
        """Resolve a capability by name.

        Raises:
            CapabilityNotAvailable: If ``name`` is not a declared capability
        """
        if name not in self._capabilities:
            raise CapabilityNotAvailable(self._variant, name, self._capabilities)

        operation = self._operations.get(name)
        if operation is not None:
            return self._fluent(lambda *args, **kwargs: operation(self._payload, *args, **kwargs))

        try:
            resolved = read_capability(self._payload, name)
        except (AttributeError, KeyError):
            # Declared but absent on this value
            raise CapabilityNotAvailable(self._variant, name, self._capabilities) from None

        if callable(resolved) and not isinstance(resolved, type):
            return self._fluent(resolved)
        return resolved

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call a callable capability."""
        return self.get(name)(*args, **kwargs)

    def _fluent(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        def call(*args: Any, **kwargs: Any) -> Any:
            result = fn(*args, **kwargs)
            if result is self._payload and not is_primitive(result):
                return self
            return result

        call.__name__ = getattr(fn, "__name__", "capability")
        return call

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not view attributes
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("NarrowedView is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("NarrowedView is read-only")

    def __dir__(self):
        return sorted(set(self._capabilities) | {"variant", "capabilities", "has", "get", "invoke"})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NarrowedView):
            return NotImplemented
        return (
            self._payload is other._payload
            and self._variant == other._variant
            and self._capabilities == other._capabilities
        )

    def __hash__(self) -> int:
        return hash((id(self._payload), self._variant, self._capabilities))

    def __repr__(self) -> str:
        caps = ", ".join(sorted(self._capabilities))
        label = self._variant or "<union>"
        return f"NarrowedView({label} {{{caps}}}: {self._payload!r})"


def narrow(result: ClassificationResult) -> NarrowedView:
    """Return the narrowed view of a matched classification.

    Raises:
        NotMatched: If the result is Unmatched or Residual
    """
    from .result import Matched

    if isinstance(result, Matched):
        return result.view
    raise NotMatched(result)
