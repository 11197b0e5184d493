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
"""Pytest configuration for narrowing tests.

Puts the ``python/`` directory on sys.path so the tests run against the
source tree without an install, and provides the shared registries used
across the unit and property tests.
"""

import sys
from pathlib import Path

import pytest

python_dir = Path(__file__).parent.parent.parent
if str(python_dir) not in sys.path:
    sys.path.insert(0, str(python_dir))

from narrowing.core.registry import VariantRegistry  # noqa: E402
from narrowing.core.values import Instance  # noqa: E402
from narrowing.predicates.nominal import NominalPredicate, TypeHierarchy  # noqa: E402
from narrowing.predicates.structural import has  # noqa: E402
from narrowing.predicates.tag import IS_NUMBER, IS_STRING  # noqa: E402


@pytest.fixture
def fish():
    name = "nemo"
    return {"name": name, "swim": lambda: f"{name} swims", "layEggs": lambda: "eggs"}


@pytest.fixture
def bird():
    name = "tweety"
    return {"name": name, "fly": lambda: f"{name} flies", "layEggs": lambda: "eggs"}


@pytest.fixture
def pet_registry():
    """Two-variant union Fish | Bird, discriminated structurally."""
    registry = VariantRegistry()
    registry.register("Fish", has("swim"), ["swim", "layEggs"])
    registry.register("Bird", has("fly"), ["fly", "layEggs"])
    return registry


@pytest.fixture
def zoo_registry():
    """Three-variant union Fish | Bird | Cat."""
    registry = VariantRegistry()
    registry.register("Fish", has("swim"), ["swim", "layEggs"])
    registry.register("Bird", has("fly"), ["fly", "layEggs"])
    registry.register("Cat", has("purr"), ["purr", "layEggs"])
    return registry


@pytest.fixture
def padding_registry():
    """number | string, as in padLeft(value, padding)."""
    registry = VariantRegistry()
    registry.register("Number", IS_NUMBER, {"repeat": lambda n, s=" ": s * n})
    registry.register("String", IS_STRING, {"upper": lambda s: s.upper(), "length": len})
    return registry


@pytest.fixture
def padder_types():
    types = TypeHierarchy()
    types.declare("SpaceRepeatingPadder")
    types.declare("StringPadder")
    types.declare("Padder", constructs=["SpaceRepeatingPadder", "StringPadder"])
    return types.freeze()


@pytest.fixture
def padder_registry(padder_types):
    registry = VariantRegistry()
    registry.register(
        "SpaceRepeatingPadder",
        NominalPredicate("SpaceRepeatingPadder", padder_types),
        {"numSpaces": None, "getPaddingString": lambda p: " " * p.numSpaces},
    )
    registry.register(
        "StringPadder",
        NominalPredicate("StringPadder", padder_types),
        {"value": None, "getPaddingString": lambda p: p.value},
    )
    return registry


@pytest.fixture
def space_padder():
    return Instance("SpaceRepeatingPadder", {"numSpaces": 4})


@pytest.fixture
def string_padder():
    return Instance("StringPadder", {"value": "  "})
