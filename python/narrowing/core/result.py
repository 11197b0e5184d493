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
"""Classification results and the per-call evaluation state machine.

Every classify call walks the same state machine:

    START -> EVALUATING(0) -> EVALUATING(1) -> ... -> MATCHED
                                                   \\-> UNMATCHED

and stops at the first predicate that holds. Results are immutable.
Unmatched and Residual are ordinary outcomes, not errors: callers are
expected to branch on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Optional, Tuple

from .view import NarrowedView


class EvaluationState(Enum):
    """States of a single classify call."""

    START = auto()
    EVALUATING = auto()
    MATCHED = auto()
    UNMATCHED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (EvaluationState.MATCHED, EvaluationState.UNMATCHED)


@dataclass(frozen=True, slots=True)
class Transition:
    """One step of the state machine; ``index`` is set for EVALUATING."""

    state: EvaluationState
    index: Optional[int] = None

    def __repr__(self) -> str:
        if self.index is None:
            return self.state.name
        return f"{self.state.name}({self.index})"


class ClassificationResult:
    """Base class for Matched, Unmatched and Residual."""

    __slots__ = ()

    @property
    def is_match(self) -> bool:
        return False


@dataclass(frozen=True)
class Matched(ClassificationResult):
    """The value belongs to ``variant``.

    Attributes:
        variant: Name of the matched variant
        view: View restricted to the variant's capabilities
        index: Registration index of the variant
        trace: Visited states (empty unless tracing is enabled)
    """

    variant: str
    view: NarrowedView
    index: int
    trace: Tuple[Transition, ...] = ()

    @property
    def is_match(self) -> bool:
        return True

    @property
    def variant_name(self) -> str:
        return self.variant


@dataclass(frozen=True)
class Unmatched(ClassificationResult):
    """No variant's predicate holds for the value."""

    trace: Tuple[Transition, ...] = ()


@dataclass(frozen=True)
class Residual(ClassificationResult):
    """The value is known to be one of several variants, but not which.

    Produced when a guard rules some variants out without pinning down a
    single one, e.g. the else branch of a guard over a union of three or
    more variants.

    Attributes:
        excluded: Variants the guard ruled out
        candidates: Remaining variants, in registration order
        view: View restricted to the capabilities all candidates share
    """

    excluded: FrozenSet[str]
    candidates: Tuple[str, ...]
    view: NarrowedView
    trace: Tuple[Transition, ...] = ()
