"""Address grammar and exclusion registry.

* ``grammar`` — anchored per-family address validation.
* ``exclusions`` — fixed table of base assets and program accounts that must
  never be reported as the token a page is about.

Both are pure, import-time constants with no I/O.
"""

from mintscope.address.exclusions import EXCLUSIONS, is_excluded
from mintscope.address.grammar import GRAMMARS, AddressGrammar, detect_family, is_valid_address

__all__ = [
    "EXCLUSIONS",
    "GRAMMARS",
    "AddressGrammar",
    "detect_family",
    "is_excluded",
    "is_valid_address",
]
