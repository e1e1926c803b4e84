"""Address grammar — anchored syntactic validation per chain family.

Each ``AddressGrammar`` maps a chain family to a compiled pattern that must
match the *whole* input. Text scraped from a page is frequently concatenated
("CA: 7xKX…sU Copy"), so a free substring search would produce false
positives; callers that need to pull an address out of a longer string
isolate the segment first and then validate it here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType

from mintscope.models.chain import ChainFamily

logger = logging.getLogger(__name__)

# Base-58 alphabet: digits and letters minus the look-alikes 0, O, I and l.
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


# ---------------------------------------------------------------------------
# Grammar definition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddressGrammar:
    """Syntactic rules for one chain family's addresses.

    Attributes:
        family: The chain family the grammar applies to.
        regex: Compiled pattern, matched with ``fullmatch`` only.
        min_length: Inclusive lower bound on address length.
        max_length: Inclusive upper bound on address length.
        example: A well-known address for documentation / testing.
    """

    family: ChainFamily
    regex: re.Pattern[str]
    min_length: int
    max_length: int
    example: str = ""

    def accepts(self, text: object) -> bool:
        """Return ``True`` if *text* is, in its entirety, an address of this family."""
        if not isinstance(text, str):
            return False
        if not self.min_length <= len(text) <= self.max_length:
            return False
        return self.regex.fullmatch(text) is not None


# ---------------------------------------------------------------------------
# Grammar registry, one per family
# ---------------------------------------------------------------------------

SOLANA_GRAMMAR = AddressGrammar(
    family=ChainFamily.SOLANA,
    regex=re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}"),
    min_length=32,
    max_length=44,
    example="DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
)

EVM_GRAMMAR = AddressGrammar(
    family=ChainFamily.EVM,
    regex=re.compile(r"0x[0-9a-fA-F]{40}"),
    min_length=42,
    max_length=42,
    example="0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe",
)

GRAMMARS: MappingProxyType[ChainFamily, AddressGrammar] = MappingProxyType(
    {
        ChainFamily.SOLANA: SOLANA_GRAMMAR,
        ChainFamily.EVM: EVM_GRAMMAR,
    }
)


def is_valid_address(text: object, family: ChainFamily) -> bool:
    """Return ``True`` if *text* is a syntactically valid address for *family*.

    Pure and total: any input, including non-strings and surrounding
    whitespace, simply yields ``False`` when it does not conform.
    """
    return GRAMMARS[family].accepts(text)


def detect_family(text: object) -> ChainFamily | None:
    """Return the family whose grammar accepts *text*, or ``None``.

    The grammars are disjoint (``0`` is not a base-58 digit), so at most one
    family can match.
    """
    for family, grammar in GRAMMARS.items():
        if grammar.accepts(text):
            return family
    return None
