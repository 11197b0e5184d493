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
"""Predicate kinds used to discriminate variants.

- tag: ``typeof``-style checks against {number, string, boolean, symbol}
- structural: duck-typing presence checks on a named capability
- nominal: ``instanceof``-style checks against a TypeHierarchy
- literal: membership in a closed set of literal values
- guard: user-defined type guard functions
- combinators: negate / and_ / or_
"""

from .base import Predicate
from .combinators import (
    Conjunction,
    Disjunction,
    Negation,
    all_of,
    and_,
    any_of,
    negate,
    or_,
)
from .guard import GuardPredicate, guard
from .literal import LiteralPredicate, literal
from .nominal import NominalPredicate, NominalType, TypeHierarchy
from .structural import StructuralPredicate, has
from .tag import (
    IS_BOOLEAN,
    IS_NUMBER,
    IS_STRING,
    IS_SYMBOL,
    TagPredicate,
    is_type,
)

__all__ = [
    "Predicate",
    # Kinds
    "TagPredicate",
    "StructuralPredicate",
    "NominalPredicate",
    "NominalType",
    "TypeHierarchy",
    "LiteralPredicate",
    "GuardPredicate",
    # Combinators
    "Negation",
    "Conjunction",
    "Disjunction",
    "negate",
    "and_",
    "or_",
    "all_of",
    "any_of",
    # Shorthands
    "is_type",
    "has",
    "literal",
    "guard",
    "IS_NUMBER",
    "IS_STRING",
    "IS_BOOLEAN",
    "IS_SYMBOL",
]
