"""Exclusion registry — well-known addresses that are never "the" token.

Pair pages always mention the quote side of the pool (wrapped native asset,
a major stablecoin) and frequently link to program accounts. Those addresses
are syntactically perfect and often appear first in document order, so every
tactic checks this table before accepting a candidate.

The table is a module constant; there is no API to change it at runtime.
"""

from __future__ import annotations

from types import MappingProxyType

from mintscope.models.chain import ChainFamily

_SOLANA_EXCLUSIONS = frozenset(
    {
        "So11111111111111111111111111111111111111112",  # Wrapped SOL
        "11111111111111111111111111111111",  # System program
        "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",  # SPL Token program
        "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",  # USDC
        "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",  # USDT
    }
)

# Stored lowercased: EIP-55 checksums make the same address appear in mixed case.
_EVM_EXCLUSIONS = frozenset(
    addr.lower()
    for addr in (
        "0x0000000000000000000000000000000000000000",  # zero address
        "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",  # WETH (Ethereum)
        "0x4200000000000000000000000000000000000006",  # WETH (Base / OP-stack predeploy)
        "0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",  # WBNB
        "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",  # WMATIC
        "0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",  # WAVAX
        "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",  # USDC (Ethereum)
        "0xdAC17F958D2ee523a2206206994597C13D831ec7",  # USDT (Ethereum)
        "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",  # USDC (Base)
    )
)

EXCLUSIONS: MappingProxyType[ChainFamily, frozenset[str]] = MappingProxyType(
    {
        ChainFamily.SOLANA: _SOLANA_EXCLUSIONS,
        ChainFamily.EVM: _EVM_EXCLUSIONS,
    }
)

# Families whose addresses compare case-insensitively.
_CASE_INSENSITIVE = frozenset({ChainFamily.EVM})


def is_excluded(address: str, family: ChainFamily) -> bool:
    """Return ``True`` if *address* is an infrastructure/base asset for *family*."""
    key = address.lower() if family in _CASE_INSENSITIVE else address
    return key in EXCLUSIONS.get(family, frozenset())
