"""Chain classification from aggregator-style URL paths.

Aggregator URLs look like ``https://dexscreener.com/<chain>/<pair>``. The
chain is whatever the first path segment names; anything else falls back to
``DEFAULT_CHAIN`` because the address, not the chain, is what a scan cannot
do without.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from urllib.parse import urlsplit

from mintscope.models.chain import DEFAULT_CHAIN, ChainId

logger = logging.getLogger(__name__)

CHAIN_SLUGS: MappingProxyType[str, ChainId] = MappingProxyType({chain.value: chain for chain in ChainId})


def classify_chain(url: str) -> ChainId:
    """Return the chain named by the first path segment of *url*.

    Total and side-effect free: malformed or unrecognized URLs return
    ``DEFAULT_CHAIN`` instead of raising.

    Examples::

        classify_chain("https://dexscreener.com/base/0xabc")  # ChainId.BASE
        classify_chain("https://dexscreener.com/ton/xyz")     # ChainId.SOLANA
    """
    if not url:
        return DEFAULT_CHAIN
    try:
        path = urlsplit(url).path
    except ValueError:
        logger.debug("Unparseable URL %r, using default chain", url)
        return DEFAULT_CHAIN
    segment = path.lstrip("/").split("/", 1)[0].lower()
    return CHAIN_SLUGS.get(segment, DEFAULT_CHAIN)
