"""
Override rule definition.

A rule says: when the requested item text matches this pattern, the answer
is this catalog product, whatever the matcher said.
"""

import re
from dataclasses import dataclass, field
from typing import Pattern

from utils.text_utils import normalize_text


@dataclass(frozen=True)
class OverrideRule:
    """
    One hardcoded correction.

    Attributes:
        name: Short identifier used in logs
        pattern: Regex searched in the normalized requested item text
        target_name: Catalog product name the item is forced to
        in_store_only: Product is only sold at the physical store
        examples: Item texts this rule must capture (checked by the ordering lint)
    """
    name: str
    pattern: str
    target_name: str
    in_store_only: bool = False
    examples: tuple[str, ...] = ()
    _regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", re.compile(self.pattern))

    def matches(self, requested_item: str) -> bool:
        """True if the rule applies to this requested item text."""
        return self._regex.search(normalize_text(requested_item)) is not None
