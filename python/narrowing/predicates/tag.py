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
"""Tag predicates: ``typeof``-style checks against a closed set of tags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.values import TypeTag, typeof
from .base import Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagPredicate(Predicate):
    """Matches values whose primitive tag equals ``tag``.

    Only the tags in ``TypeTag`` act as guards. A predicate built from any
    other string (``"object"``, ``"undefined"``, a typo) is legal but never
    matches.

    Example:
        >>> TagPredicate("number").test(4)
        True
        >>> TagPredicate("number").test(True)
        False
    """

    tag: str

    def __post_init__(self) -> None:
        if TypeTag.parse(self.tag) is None:
            logger.debug(f"typeof tag '{self.tag}' is not a guard tag; predicate never matches")

    @property
    def type_tag(self) -> Optional[TypeTag]:
        return TypeTag.parse(self.tag)

    @property
    def recognized(self) -> bool:
        return self.type_tag is not None

    def test(self, value: Any) -> bool:
        if not self.recognized:
            return False
        return typeof(value) == self.tag

    def describe(self) -> str:
        return f'typeof x === "{self.tag}"'


def is_type(tag: str) -> TagPredicate:
    """Shorthand for ``TagPredicate(tag)``."""
    return TagPredicate(tag)


IS_NUMBER = TagPredicate(TypeTag.NUMBER.value)
IS_STRING = TagPredicate(TypeTag.STRING.value)
IS_BOOLEAN = TagPredicate(TypeTag.BOOLEAN.value)
IS_SYMBOL = TagPredicate(TypeTag.SYMBOL.value)
