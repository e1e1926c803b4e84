"""Chain identifiers and the address families they belong to.

``ChainId`` is what callers receive alongside a resolved address; a
``ChainFamily`` groups chains that share one address grammar and one
exclusion table (every EVM chain uses ``0x``-prefixed hex addresses).
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class ChainFamily(str, Enum):
    """Address families with distinct syntactic grammars."""

    SOLANA = "solana"
    EVM = "evm"


class ChainId(str, Enum):
    """Chains the aggregator sites expose as the first URL path segment."""

    SOLANA = "solana"
    BASE = "base"
    ETHEREUM = "ethereum"
    BSC = "bsc"
    POLYGON = "polygon"
    AVALANCHE = "avalanche"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"

    @property
    def family(self) -> ChainFamily:
        """The address family this chain's contracts belong to."""
        return CHAIN_FAMILIES[self]


DEFAULT_CHAIN = ChainId.SOLANA

CHAIN_FAMILIES: MappingProxyType[ChainId, ChainFamily] = MappingProxyType(
    {
        ChainId.SOLANA: ChainFamily.SOLANA,
        ChainId.BASE: ChainFamily.EVM,
        ChainId.ETHEREUM: ChainFamily.EVM,
        ChainId.BSC: ChainFamily.EVM,
        ChainId.POLYGON: ChainFamily.EVM,
        ChainId.AVALANCHE: ChainFamily.EVM,
        ChainId.ARBITRUM: ChainFamily.EVM,
        ChainId.OPTIMISM: ChainFamily.EVM,
    }
)
