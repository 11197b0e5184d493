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
"""Unit tests for the discriminator.

Tests for:
- First-match classification in registration order
- The number | string padding scenario
- The SpaceRepeatingPadder / StringPadder nominal scenario
- Guard narrowing: binary else-branch, Residual for wider unions
- Evaluation traces, predicate errors, metrics
"""

import logging

import pytest

from narrowing.core.config import DiscriminatorConfig
from narrowing.core.discriminator import Discriminator
from narrowing.core.errors import (
    CapabilityNotAvailable,
    NotMatched,
    PredicateEvaluationError,
    RegistryFrozen,
)
from narrowing.core.registry import VariantRegistry
from narrowing.core.result import (
    EvaluationState,
    Matched,
    Residual,
    Transition,
    Unmatched,
)
from narrowing.core.values import Instance
from narrowing.core.view import narrow
from narrowing.observability import MetricsCollector
from narrowing.predicates import (
    IS_NUMBER,
    IS_STRING,
    NominalPredicate,
    TypeHierarchy,
    and_,
    guard,
    has,
    negate,
    or_,
)


# ===========================================================================
# classify()
# ===========================================================================


class TestClassify:
    """Tests for first-match classification."""

    def test_number_scenario(self, padding_registry):
        """classify(4) matches Number and the view exposes repeat."""
        d = Discriminator(padding_registry)
        result = d.classify(4)
        assert isinstance(result, Matched)
        assert result.variant == "Number"
        assert result.variant_name == "Number"
        assert result.index == 0
        assert result.is_match
        assert narrow(result).repeat() == "    "
        assert narrow(result).repeat("-") == "----"

    def test_string_scenario(self, padding_registry):
        d = Discriminator(padding_registry)
        result = d.classify("x")
        assert isinstance(result, Matched)
        assert result.variant == "String"
        assert result.index == 1
        assert narrow(result).upper() == "X"

    def test_boolean_unmatched(self, padding_registry):
        """classify(True) matches neither number nor string."""
        result = Discriminator(padding_registry).classify(True)
        assert isinstance(result, Unmatched)
        assert not result.is_match

    def test_unmatched_is_a_value_not_an_error(self, pet_registry):
        assert Discriminator(pet_registry).classify({"purr": True}) == Unmatched()

    def test_earlier_registration_wins(self, fish):
        """A value matching two variants classifies as the earlier one."""
        registry = VariantRegistry()
        registry.register("Fish", has("swim"), ["swim"])
        registry.register("EggLayer", has("layEggs"), ["layEggs"])
        assert Discriminator(registry).classify(fish).variant == "Fish"

        registry = VariantRegistry()
        registry.register("EggLayer", has("layEggs"), ["layEggs"])
        registry.register("Fish", has("swim"), ["swim"])
        assert Discriminator(registry).classify(fish).variant == "EggLayer"

    def test_structural_union(self, pet_registry, fish, bird):
        d = Discriminator(pet_registry)
        assert d.classify(fish).variant == "Fish"
        assert d.classify(bird).variant == "Bird"
        assert narrow(d.classify(bird)).fly() == "tweety flies"

    def test_empty_registry(self):
        assert isinstance(Discriminator(VariantRegistry()).classify(1), Unmatched)

    def test_alias_reports_target_name(self, pet_registry, fish):
        """Classification through an aliased variant reports the canonical name."""
        pet_registry.alias("Swimmer", "Fish")
        assert Discriminator(pet_registry).classify(fish).variant == "Fish"

    def test_intersection_variant(self):
        registry = VariantRegistry()
        registry.register("Person", has("name"), ["name"])
        registry.register("Loggable", has("log"), ["log"])
        registry.register_intersection("LoggablePerson", ["Person", "Loggable"])
        d = Discriminator(registry)
        value = {"name": "jim", "log": lambda: "logged"}
        # First match wins, so the plain Person variant is reported ...
        assert d.classify(value).variant == "Person"
        # ... while guarding on both parts narrows to the intersection
        result = d.guard(value, and_(has("name"), has("log")))
        assert result.variant == "LoggablePerson"
        view = narrow(result)
        assert view.name == "jim"
        assert view.log() == "logged"


class TestNominalScenario:
    """Tests for instanceof-style variants."""

    def test_space_padder(self, padder_registry, space_padder):
        result = Discriminator(padder_registry).classify(space_padder)
        assert result.variant == "SpaceRepeatingPadder"
        view = narrow(result)
        assert view.numSpaces == 4
        assert view.getPaddingString() == "    "

    def test_string_padder(self, padder_registry, string_padder):
        result = Discriminator(padder_registry).classify(string_padder)
        assert result.variant == "StringPadder"
        assert narrow(result).getPaddingString() == "  "

    def test_space_padder_never_matches_string_padder(self, padder_registry, padder_types, space_padder):
        """A value constructed as SpaceRepeatingPadder never matches StringPadder."""
        d = Discriminator(padder_registry)
        is_string_padder = NominalPredicate("StringPadder", padder_types)
        assert isinstance(d.guard(space_padder, is_string_padder), Unmatched)
        view = narrow(d.classify(space_padder))
        with pytest.raises(CapabilityNotAvailable):
            view.value


# ===========================================================================
# guard()
# ===========================================================================


class TestGuard:
    """Tests for narrowing through guards."""

    def test_if_branch(self, pet_registry, fish):
        result = Discriminator(pet_registry).guard(fish, has("swim"))
        assert result.variant == "Fish"
        assert narrow(result).swim() == "nemo swims"

    def test_else_branch_binary_union(self, pet_registry, bird):
        """negate(isFish) where isFish fails narrows to Bird."""
        result = Discriminator(pet_registry).guard(bird, negate(has("swim")))
        assert isinstance(result, Matched)
        assert result.variant == "Bird"
        assert result.index == 1
        assert narrow(result).fly() == "tweety flies"

    def test_else_branch_with_guard_function(self, fish, bird):
        @guard
        def is_fish(pet):
            return "swim" in pet

        registry = VariantRegistry()
        registry.register("Fish", is_fish, ["swim", "layEggs"])
        registry.register("Bird", negate(is_fish), ["fly", "layEggs"])
        d = Discriminator(registry)
        assert d.guard(fish, is_fish).variant == "Fish"
        assert d.guard(bird, negate(is_fish)).variant == "Bird"

    def test_else_branch_not_taken(self, pet_registry, fish):
        """The guard does not hold, so there is nothing to narrow."""
        result = Discriminator(pet_registry).guard(fish, negate(has("swim")))
        assert isinstance(result, Unmatched)

    def test_else_branch_wider_union_is_residual(self, zoo_registry, bird):
        """With more than two variants, negation only rules one out."""
        d = Discriminator(zoo_registry)
        result = d.guard(bird, negate(has("swim")))
        assert isinstance(result, Residual)
        assert not result.is_match
        assert result.excluded == frozenset({"Fish"})
        assert result.candidates == ("Bird", "Cat")
        assert result.view.capabilities == frozenset({"layEggs"})
        assert result.view.layEggs() == "eggs"
        with pytest.raises(NotMatched):
            narrow(result)

    def test_residual_view_blocks_candidate_capabilities(self, zoo_registry, bird):
        result = Discriminator(zoo_registry).guard(bird, negate(has("swim")))
        with pytest.raises(CapabilityNotAvailable):
            result.view.fly

    def test_disjunction_guard(self, zoo_registry, fish):
        result = Discriminator(zoo_registry).guard(fish, or_(has("swim"), has("fly")))
        assert isinstance(result, Residual)
        assert result.candidates == ("Fish", "Bird")
        assert result.excluded == frozenset({"Cat"})

    def test_contradictory_guard(self, pet_registry):
        value = {"swim": lambda: 1, "fly": lambda: 2}
        result = Discriminator(pet_registry).guard(value, and_(has("swim"), has("fly")))
        assert isinstance(result, Unmatched)

    def test_negated_conjunction_falls_back_to_classify(self, pet_registry, fish):
        """not (hungry and fish) holds for a fish that is not hungry: still a Fish."""
        is_hungry = guard(lambda pet: pet.get("hungry", False))
        result = Discriminator(pet_registry).guard(fish, negate(and_(is_hungry, has("swim"))))
        assert isinstance(result, Matched)
        assert result.variant == "Fish"
        assert narrow(result).swim() == "nemo swims"

    def test_negated_disjunction_narrows_to_remaining_variant(self, zoo_registry):
        cat = {"purr": lambda: "purr", "layEggs": lambda: "no"}
        result = Discriminator(zoo_registry).guard(cat, negate(or_(has("swim"), has("fly"))))
        assert isinstance(result, Matched)
        assert result.variant == "Cat"
        assert narrow(result).purr() == "purr"

    def test_unrelated_guard_falls_back_to_classify(self, pet_registry, fish):
        d = Discriminator(pet_registry)
        assert d.guard(fish, has("name")).variant == "Fish"
        assert isinstance(d.guard(4, IS_NUMBER), Unmatched)

    def test_tag_guard(self, padding_registry):
        d = Discriminator(padding_registry)
        assert d.guard(4, IS_NUMBER).variant == "Number"
        assert d.guard("x", negate(IS_NUMBER)).variant == "String"


# ===========================================================================
# Views, lifecycle, config
# ===========================================================================


class TestUnionView:
    """Tests for the un-narrowed union view."""

    def test_only_shared_capabilities(self, pet_registry, fish):
        view = Discriminator(pet_registry).union_view(fish)
        assert view.variant is None
        assert view.layEggs() == "eggs"
        with pytest.raises(CapabilityNotAvailable) as exc_info:
            view.swim
        assert exc_info.value.variant is None
        assert exc_info.value.capability == "swim"


class TestLifecycle:
    def test_registry_frozen_by_discriminator(self, pet_registry):
        """Constructing a discriminator makes the registry read-only."""
        Discriminator(pet_registry)
        with pytest.raises(RegistryFrozen):
            pet_registry.register("Cat", has("purr"))

    def test_type_hierarchy_frozen_by_discriminator(self):
        """Declaring a subtype later cannot change what classify returns."""
        types = TypeHierarchy()
        types.declare("A")
        registry = VariantRegistry()
        registry.register("A", NominalPredicate("A", types))
        d = Discriminator(registry)
        assert isinstance(d.classify(Instance("B")), Unmatched)
        with pytest.raises(RegistryFrozen):
            types.declare("B", bases=["A"])
        assert isinstance(d.classify(Instance("B")), Unmatched)

    def test_narrow_method(self, padding_registry):
        d = Discriminator(padding_registry)
        assert d.narrow(d.classify(2)).repeat() == "  "
        with pytest.raises(NotMatched):
            d.narrow(d.classify(None))


class TestTrace:
    """Tests for state machine traces."""

    def test_no_trace_by_default(self, padding_registry):
        assert Discriminator(padding_registry).classify("x").trace == ()

    def test_matched_trace(self, padding_registry):
        d = Discriminator(padding_registry, DiscriminatorConfig(trace=True))
        assert d.classify("x").trace == (
            Transition(EvaluationState.START),
            Transition(EvaluationState.EVALUATING, 0),
            Transition(EvaluationState.EVALUATING, 1),
            Transition(EvaluationState.MATCHED),
        )

    def test_unmatched_trace(self, padding_registry):
        d = Discriminator(padding_registry, DiscriminatorConfig(trace=True))
        trace = d.classify(True).trace
        assert [repr(t) for t in trace] == ["START", "EVALUATING(0)", "EVALUATING(1)", "UNMATCHED"]
        assert trace[-1].state.is_terminal
        assert not trace[1].state.is_terminal


class TestPredicateErrors:
    """Tests for predicates that raise."""

    @pytest.fixture
    def fragile_registry(self):
        registry = VariantRegistry()
        registry.register("Broken", guard(lambda v: v["missing"], name="broken"), ["x"])
        registry.register("Number", IS_NUMBER, ["real"])
        return registry

    def test_error_propagates(self, fragile_registry):
        with pytest.raises(PredicateEvaluationError) as exc_info:
            Discriminator(fragile_registry).classify({})
        assert exc_info.value.variant == "Broken"
        assert isinstance(exc_info.value.cause, KeyError)

    def test_error_suppressed(self, fragile_registry, caplog):
        """With suppression on, a failing predicate counts as no match."""
        config = DiscriminatorConfig(suppress_predicate_errors=True)
        d = Discriminator(fragile_registry, config)
        with caplog.at_level(logging.WARNING, logger="narrowing.core.discriminator"):
            result = d.classify(3)
        assert result.variant == "Number"
        assert "broken(x)" in caplog.text

    def test_error_recorded(self, fragile_registry):
        collector = MetricsCollector()
        alerts = []
        collector.register_alert_callback(lambda kind, data: alerts.append((kind, data["variant"])))
        config = DiscriminatorConfig(suppress_predicate_errors=True)
        Discriminator(fragile_registry, config, collector).classify(3)
        assert collector.get_classification_metrics().predicate_errors == {"Broken": 1}
        assert alerts == [("predicate_error", "Broken")]


class TestMetrics:
    """Tests for metrics recording."""

    def test_collector_created_from_config(self, padding_registry):
        d = Discriminator(padding_registry, DiscriminatorConfig(collect_metrics=True))
        assert isinstance(d.collector, MetricsCollector)

    def test_no_collector_by_default(self, padding_registry):
        assert Discriminator(padding_registry).collector is None

    def test_outcomes_counted(self, padding_registry):
        d = Discriminator(padding_registry, DiscriminatorConfig(collect_metrics=True))
        d.classify(4)
        d.classify("x")
        d.classify(True)
        metrics = d.collector.get_classification_metrics()
        assert metrics.matches_by_variant == {"Number": 1, "String": 1}
        assert metrics.unmatched == 1
        # 1 for Number, 2 for String, 2 for the unmatched boolean
        assert metrics.predicate_evaluations == 5
        assert d.collector.get_latency_metrics().count == 3

    def test_residual_counted(self, zoo_registry, bird):
        d = Discriminator(zoo_registry, DiscriminatorConfig(collect_metrics=True))
        d.guard(bird, negate(has("swim")))
        assert d.collector.get_classification_metrics().residual == 1
