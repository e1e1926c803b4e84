"""Token-identity resolution engine.

* ``chain`` — chain classification from URL paths.
* ``tactics`` — individual page-signal extractors.
* ``strategies`` — ordered tactic lists per site family.
* ``dispatcher`` — host-based strategy selection; ``resolve`` entry point.
"""

from mintscope.resolution.chain import classify_chain
from mintscope.resolution.dispatcher import resolve, resolve_page, select_strategy
from mintscope.resolution.strategies import AGGREGATOR_STRATEGY, LAUNCHPAD_STRATEGY, Strategy

__all__ = [
    "AGGREGATOR_STRATEGY",
    "LAUNCHPAD_STRATEGY",
    "Strategy",
    "classify_chain",
    "resolve",
    "resolve_page",
    "select_strategy",
]
