"""
Error taxonomy for the clustering engine.

All errors derive from ``ClusteringError`` (itself a ``ValueError``) so callers
that already guard clustering calls with ``except ValueError`` keep working.
Errors are raised synchronously before any partial result is produced.
"""

from typing import Iterable


class ClusteringError(ValueError):
    """Base class for clustering engine errors."""


class InvalidKError(ClusteringError):
    """Requested number of clusters is outside ``2..n``."""

    def __init__(self, k: int, n: int):
        self.k = k
        self.n = n
        if k < 2:
            msg = f"k must be >= 2, got {k}"
        else:
            msg = f"k={k} exceeds number of observations ({n})"
        super().__init__(msg)


class UnknownDissimilarityError(ClusteringError):
    """Requested dissimilarity is not in the supported set."""

    def __init__(self, name: str, supported: Iterable[str]):
        self.name = name
        self.supported = sorted(supported)
        super().__init__(
            f"Unknown dissimilarity: {name!r}. "
            f"Supported: {', '.join(self.supported)}"
        )


class EmptyInputError(ClusteringError):
    """No observations were supplied."""

    def __init__(self):
        super().__init__("Cannot cluster an empty dataset (0 observations)")
