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
"""narrowing: runtime type-guard narrowing of tagged union values.

A value whose shape is one of several known variants is classified at
runtime, and code may use variant-specific capabilities only through the
view handed out after a successful classification.

Key Components:
    - core.registry: VariantRegistry, the static list of variants
    - core.discriminator: Discriminator.classify / Discriminator.guard
    - core.view: NarrowedView and narrow()
    - predicates: tag (typeof), structural, nominal (instanceof), literal,
      guard functions, and the negate / and_ / or_ combinators
    - observability: MetricsCollector

Usage:
    >>> from narrowing import VariantRegistry, Discriminator, IS_NUMBER, IS_STRING, narrow
    >>> registry = VariantRegistry()
    >>> registry.register("Number", IS_NUMBER, {"repeat": lambda n, s=" ": s * n})
    >>> registry.register("String", IS_STRING, ["upper"])
    >>> d = Discriminator(registry)
    >>> narrow(d.classify(4)).repeat()
    '    '
"""

# Use lazy imports so that importing a single submodule stays cheap
# Full imports are done on first access via __getattr__

_CORE_NAMES = (
    "CapabilityNotAvailable",
    "ClassificationResult",
    "DEFAULT_CONFIG",
    "Discriminator",
    "DiscriminatorConfig",
    "DuplicateVariant",
    "EvaluationState",
    "Instance",
    "Matched",
    "NarrowedView",
    "NarrowingError",
    "NotMatched",
    "PredicateEvaluationError",
    "RegistryFrozen",
    "Residual",
    "Symbol",
    "Transition",
    "TypeTag",
    "UnknownVariant",
    "Unmatched",
    "Variant",
    "VariantRegistry",
    "narrow",
    "nominal_tag_of",
    "typeof",
)

_PREDICATE_NAMES = (
    "IS_BOOLEAN",
    "IS_NUMBER",
    "IS_STRING",
    "IS_SYMBOL",
    "Conjunction",
    "Disjunction",
    "GuardPredicate",
    "LiteralPredicate",
    "Negation",
    "NominalPredicate",
    "NominalType",
    "Predicate",
    "StructuralPredicate",
    "TagPredicate",
    "TypeHierarchy",
    "all_of",
    "and_",
    "any_of",
    "guard",
    "has",
    "is_type",
    "literal",
    "negate",
    "or_",
)


def __getattr__(name: str):
    """Lazy import of module attributes."""
    if name in _CORE_NAMES:
        from . import core

        return getattr(core, name)

    if name in _PREDICATE_NAMES:
        from . import predicates

        return getattr(predicates, name)

    if name in ("MetricsCollector", "ClassificationMetrics", "LatencyMetrics"):
        from . import observability

        return getattr(observability, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    *_CORE_NAMES,
    *_PREDICATE_NAMES,
    "MetricsCollector",
    "ClassificationMetrics",
    "LatencyMetrics",
]

__version__ = "0.1.0"
