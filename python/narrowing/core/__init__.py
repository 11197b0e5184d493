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
"""Core narrowing components: registry, discriminator, results and views."""

from .config import DEFAULT_CONFIG, DiscriminatorConfig
from .discriminator import Discriminator
from .errors import (
    CapabilityNotAvailable,
    DuplicateVariant,
    NarrowingError,
    NotMatched,
    PredicateEvaluationError,
    RegistryFrozen,
    UnknownVariant,
)
from .registry import VariantRegistry
from .result import (
    ClassificationResult,
    EvaluationState,
    Matched,
    Residual,
    Transition,
    Unmatched,
)
from .values import Instance, Symbol, TypeTag, nominal_tag_of, typeof
from .variant import Variant
from .view import NarrowedView, narrow

__all__ = [
    "Discriminator",
    "DiscriminatorConfig",
    "DEFAULT_CONFIG",
    "VariantRegistry",
    "Variant",
    "ClassificationResult",
    "Matched",
    "Unmatched",
    "Residual",
    "EvaluationState",
    "Transition",
    "NarrowedView",
    "narrow",
    "Instance",
    "Symbol",
    "TypeTag",
    "typeof",
    "nominal_tag_of",
    "NarrowingError",
    "DuplicateVariant",
    "UnknownVariant",
    "RegistryFrozen",
    "CapabilityNotAvailable",
    "NotMatched",
    "PredicateEvaluationError",
]
