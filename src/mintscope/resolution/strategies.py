"""Per-site strategies — ordered tactic lists with first-accepted-wins semantics.

A strategy walks its tactics lazily in priority order and stops at the first
candidate that passes acceptance. There is no scoring step: a later tactic
is never consulted once an earlier one has produced an accepted address, and
within a tactic earlier proposals beat later ones.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from mintscope.address.exclusions import is_excluded
from mintscope.address.grammar import is_valid_address
from mintscope.models.chain import ChainFamily, ChainId
from mintscope.models.resolution import Candidate, SiteContext
from mintscope.resolution.tactics import (
    COPY_CONTROLS_TACTIC,
    DATA_ATTRIBUTES_TACTIC,
    EMBEDDED_PAIR_TACTIC,
    EXPLORER_LINKS_TACTIC,
    LAUNCH_PATH_TACTIC,
    Tactic,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Strategy:
    """Resolution procedure for one site family.

    Attributes:
        name: Identifier used in logs.
        tactics: Tactics in priority order.
        family: Fixed address family for single-chain sites; ``None`` means
            the family follows the chain classified from the URL.
    """

    name: str
    tactics: tuple[Tactic, ...]
    family: ChainFamily | None = None

    def family_for(self, chain: ChainId) -> ChainFamily:
        return self.family or chain.family

    def candidates(self, context: SiteContext, family: ChainFamily) -> Iterator[Candidate]:
        """Lazily yield every proposal, tactic by tactic."""
        for rank, tactic in enumerate(self.tactics):
            if tactic.needs_document and context.document is None:
                logger.debug("%s: no document, skipping tactic %s", self.name, tactic.name)
                continue
            for address in tactic.extract(context, family):
                yield Candidate(address=address, tactic=tactic.name, rank=rank)

    def accepts(self, candidate: Candidate, family: ChainFamily) -> bool:
        if not is_valid_address(candidate.address, family):
            return False
        if is_excluded(candidate.address, family):
            logger.debug("%s: skipping excluded address %s from %s", self.name, candidate.address, candidate.tactic)
            return False
        return True

    def run(self, context: SiteContext, family: ChainFamily) -> Candidate | None:
        """Return the first accepted candidate, or ``None`` once all tactics are exhausted."""
        for candidate in self.candidates(context, family):
            if self.accepts(candidate, family):
                return candidate
        return None


# ---------------------------------------------------------------------------
# Site families
# ---------------------------------------------------------------------------

# Pair-explorer aggregators: the URL names a pool, not the token, so the mint
# has to come from the page itself.
AGGREGATOR_STRATEGY = Strategy(
    name="aggregator",
    tactics=(
        EXPLORER_LINKS_TACTIC,
        EMBEDDED_PAIR_TACTIC,
        DATA_ATTRIBUTES_TACTIC,
        COPY_CONTROLS_TACTIC,
    ),
)

# Launch platforms are Solana-only and carry the mint in the URL path.
LAUNCHPAD_STRATEGY = Strategy(
    name="launchpad",
    tactics=(LAUNCH_PATH_TACTIC,),
    family=ChainFamily.SOLANA,
)
