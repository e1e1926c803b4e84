"""mintscope exception hierarchy.

The resolution engine itself never raises past ``resolve``; these types are
used by the outer surfaces that obtain a document to resolve against.
"""

from __future__ import annotations


class MintscopeError(Exception):
    """Base exception for all mintscope-specific errors."""


class PageLoadError(MintscopeError):
    """Raised when a live page cannot be loaded for resolution.

    Attributes:
        url: The URL that failed to load.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to load {url}: {reason}")


class SnapshotReadError(MintscopeError):
    """Raised when a saved HTML snapshot cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read HTML snapshot {path}: {reason}")
