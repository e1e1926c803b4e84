"""Models for a single resolution run.

``SiteContext`` — the caller-owned input: hostname, URL and live document.
``Candidate`` — an address proposed by one tactic, before acceptance.
``ResolutionResult`` — either a resolved ``(address, chain)`` pair or an
explicit not-found outcome; never anything in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, model_validator

from mintscope.models.chain import ChainId

if TYPE_CHECKING:
    from mintscope.dom.document import PageDocument


# ---------------------------------------------------------------------------
# Inputs and intermediates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SiteContext:
    """Input to one ``resolve`` call.

    The document handle is read during the call only; the engine never keeps
    it afterwards, so a fresh context should be built for every decision
    point on a page that keeps mutating.

    Attributes:
        hostname: Host of the current page, e.g. ``"dexscreener.com"``.
        url: Full URL of the current page.
        document: Live or snapshot DOM satisfying ``PageDocument``. May be
            ``None`` for strategies that only look at the URL.
    """

    hostname: str
    url: str
    document: PageDocument | None = None


@dataclass(frozen=True)
class Candidate:
    """An address proposed by a tactic.

    Attributes:
        address: The raw address string as found on the page.
        tactic: Name of the tactic that produced it (log-only).
        rank: Priority of that tactic within its strategy, 0 = highest.
    """

    address: str
    tactic: str
    rank: int


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class NotFoundReason(str, Enum):
    """Why a resolution produced no address."""

    NO_STRATEGY = "no_strategy"
    EXHAUSTED = "exhausted"
    DOCUMENT_ERROR = "document_error"


class ResolutionResult(BaseModel):
    """Outcome of a resolution run.

    Build instances with ``resolved()`` or ``not_found()``. The validator
    rejects half-filled states so a best guess can never pass for a result.
    """

    model_config = ConfigDict(frozen=True)

    address: str | None = None
    chain: ChainId | None = None
    reason: NotFoundReason | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "ResolutionResult":
        if self.address is not None:
            if self.chain is None:
                raise ValueError("a resolved address must carry a chain")
            if self.reason is not None:
                raise ValueError("a resolved result cannot carry a not-found reason")
        else:
            if self.chain is not None:
                raise ValueError("a not-found result cannot carry a chain")
            if self.reason is None:
                raise ValueError("a not-found result must carry a reason")
        return self

    @classmethod
    def resolved(cls, address: str, chain: ChainId) -> "ResolutionResult":
        return cls(address=address, chain=chain)

    @classmethod
    def not_found(cls, reason: NotFoundReason) -> "ResolutionResult":
        return cls(reason=reason)

    @property
    def found(self) -> bool:
        return self.address is not None

    @property
    def needs_fallback(self) -> bool:
        """``True`` when no site strategy covered the host.

        The caller may then apply its own URL-based heuristics; a site that
        has a strategy but yielded nothing is not escalated.
        """
        return self.reason is NotFoundReason.NO_STRATEGY

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stable output contract."""
        if self.address is None:
            return {"found": False}
        return {"address": self.address, "chain": self.chain.value}
