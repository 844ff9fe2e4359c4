"""
Distance matrix construction.

Builds the symmetric, zero-diagonal matrix of pairwise dissimilarities for
either canonical token sequences or numeric vectors. Only the upper triangle
is evaluated; the lower triangle is mirrored.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..exceptions import UnknownDissimilarityError
from ..utils.logging_config import get_logger
from .dissimilarity import NUMERIC_DISSIMILARITIES, SEQUENCE_DISSIMILARITIES, hamming
from .sequences import Token, effective_length

logger = get_logger(__name__)


class DistanceMatrix:
    """
    Square matrix of pairwise distances owned by one clustering call.

    The backing array is private; ``values`` hands out a read-only view so a
    result can be inspected without being modified.
    """

    def __init__(self, values: np.ndarray):
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {arr.shape}")
        arr.setflags(write=False)
        self._values = arr

    @classmethod
    def zeros(cls, n: int) -> "DistanceMatrix":
        return cls(np.zeros((n, n), dtype=np.float64))

    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def shape(self):
        return self._values.shape

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the backing array, not a copy."""
        return self._values

    def get(self, i: int, j: int) -> float:
        return float(self._values[i, j])

    def tolist(self) -> List[List[float]]:
        return self._values.tolist()

    def __len__(self) -> int:
        return self.rows

    def __getitem__(self, key):
        return self._values[key]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._values.copy()
        return self._values.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DistanceMatrix):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"DistanceMatrix(n={self.rows})"


def sequence_distance_matrix(
    sequences: Sequence[Sequence[Token]],
    dissimilarity: str = "hamming",
    weighted: bool = False,
    lambda_: float = 1.0,
) -> DistanceMatrix:
    """
    Pairwise distances between canonical token lists.

    Args:
        sequences: Canonical token lists (output of ``to_token_lists``)
        dissimilarity: Name in ``SEQUENCE_DISSIMILARITIES``
        weighted: Weighted Hamming (only used with ``hamming``)
        lambda_: Decay rate for weighted Hamming

    Returns:
        DistanceMatrix of shape (n, n)

    Raises:
        UnknownDissimilarityError: If the name is not supported
    """
    if dissimilarity not in SEQUENCE_DISSIMILARITIES:
        raise UnknownDissimilarityError(dissimilarity, SEQUENCE_DISSIMILARITIES)

    n = len(sequences)
    dist = np.zeros((n, n), dtype=np.float64)

    if dissimilarity == "hamming":
        for i in range(n):
            for j in range(i + 1, n):
                d = hamming(sequences[i], sequences[j], weighted, lambda_)
                dist[i, j] = d
                dist[j, i] = d
    else:
        func = SEQUENCE_DISSIMILARITIES[dissimilarity]
        eff_lens = [effective_length(seq) for seq in sequences]
        for i in range(n):
            for j in range(i + 1, n):
                d = func(sequences[i], sequences[j], eff_lens[i], eff_lens[j])
                dist[i, j] = d
                dist[j, i] = d

    logger.debug("Built %dx%d %s distance matrix", n, n, dissimilarity)
    return DistanceMatrix(dist)


def numeric_distance_matrix(
    rows: Sequence[Sequence[float]] | np.ndarray,
    dissimilarity: str = "euclidean",
) -> DistanceMatrix:
    """
    Pairwise distances between fixed-length numeric vectors.

    Args:
        rows: Array-like of shape (n_samples, n_features)
        dissimilarity: ``"euclidean"`` or ``"manhattan"``

    Returns:
        DistanceMatrix of shape (n, n)

    Raises:
        UnknownDissimilarityError: If the name is not supported
        ValueError: If rows differ in length or hold non-finite values
    """
    if dissimilarity not in NUMERIC_DISSIMILARITIES:
        raise UnknownDissimilarityError(dissimilarity, NUMERIC_DISSIMILARITIES)

    if len(rows) == 0:
        return DistanceMatrix.zeros(0)
    lengths = {len(row) for row in rows}
    if len(lengths) > 1:
        raise ValueError(f"Numeric rows must have equal length, got lengths {sorted(lengths)}")
    X = np.asarray(rows, dtype=np.float64).reshape(len(rows), -1)
    if not np.all(np.isfinite(X)):
        raise ValueError("Numeric data must be finite (no NaN or inf)")

    n = X.shape[0]
    func = NUMERIC_DISSIMILARITIES[dissimilarity]
    dist = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = func(X[i], X[j])
            dist[i, j] = d
            dist[j, i] = d

    logger.debug("Built %dx%d %s distance matrix", n, n, dissimilarity)
    return DistanceMatrix(dist)
