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
"""Error taxonomy for the narrowing library.

Configuration errors (DuplicateVariant, UnknownVariant, RegistryFrozen) and
misuse errors (CapabilityNotAvailable, NotMatched) are programmer errors and
are raised immediately. A value that matches no variant is NOT an error: it
is reported as an Unmatched or Residual classification result.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Optional


class NarrowingError(Exception):
    """Base class for all narrowing errors."""


class DuplicateVariant(NarrowingError):
    """A variant (or alias) with this name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variant '{name}' is already registered")


class UnknownVariant(NarrowingError):
    """No variant or alias with this name is registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variant '{name}'")


class RegistryFrozen(NarrowingError):
    """The registry was mutated after it was frozen."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Cannot {operation}: variant registry is frozen and read-only"
        )


class CapabilityNotAvailable(NarrowingError, AttributeError):
    """A capability outside the narrowed variant's declared set was accessed.

    Subclasses AttributeError so that ``hasattr(view, name)`` and
    ``getattr(view, name, default)`` behave as expected on views.
    """

    def __init__(
        self,
        variant: Optional[str],
        capability: str,
        available: Iterable[str] = (),
    ):
        self.variant = variant
        self.capability = capability
        self.available: FrozenSet[str] = frozenset(available)
        where = f"variant '{variant}'" if variant else "the union"
        listed = ", ".join(sorted(self.available)) or "<none>"
        super().__init__(
            f"Capability '{capability}' is not available on {where} "
            f"(available: {listed})"
        )


class NotMatched(NarrowingError):
    """narrow() was called on a result that is not a match."""

    def __init__(self, result: Any):
        self.result = result
        super().__init__(f"Cannot narrow a non-matching result: {result!r}")


class PredicateEvaluationError(NarrowingError):
    """A predicate raised while being evaluated against a value."""

    def __init__(self, predicate: Any, variant: Optional[str], cause: BaseException):
        self.predicate = predicate
        self.variant = variant
        self.cause = cause
        where = f" for variant '{variant}'" if variant else ""
        super().__init__(f"Predicate {predicate!r}{where} failed: {cause}")
