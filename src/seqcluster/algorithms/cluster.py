"""
Clustering entry point.

``cluster_data`` accepts token sequences, a ``PreparedSequences`` container
or a numeric matrix, builds the matching distance matrix, runs PAM or
hierarchical clustering and scores the partition with the silhouette.
"""

from __future__ import annotations

import numbers
import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .. import config as config_module
from ..config import ClusteringConfig
from ..exceptions import EmptyInputError, InvalidKError, UnknownDissimilarityError
from ..utils.logging_config import get_logger
from .clustering import hierarchical, pam, resolve_linkage, silhouette_score_precomputed
from .dissimilarity import NUMERIC_DISSIMILARITIES, SEQUENCE_DISSIMILARITIES
from .distance_matrix import DistanceMatrix, numeric_distance_matrix, sequence_distance_matrix
from .sequences import PreparedSequences, SequenceData, to_token_lists

logger = get_logger(__name__)

ClusterInput = Union[SequenceData, PreparedSequences, np.ndarray, Sequence[Sequence[float]]]


@dataclass
class ClusterResult:
    """Result of a single clustering call."""

    data: List[List[Any]]
    k: int
    assignments: List[int]
    silhouette: float
    sizes: List[int]
    method: str
    distance: DistanceMatrix
    dissimilarity: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n(self) -> int:
        return len(self.assignments)

    def members(self, cluster_id: int) -> List[int]:
        """Observation indices assigned to ``cluster_id`` (1-indexed)."""
        return [i for i, c in enumerate(self.assignments) if c == cluster_id]


def is_numeric_data(data: Any) -> bool:
    """
    True when ``data`` looks like a matrix of numbers.

    A numpy array qualifies by dtype; a list qualifies when its first row is a
    non-empty sequence whose first entry is a real number. Booleans are tokens,
    not numbers.
    """
    if isinstance(data, np.ndarray):
        return data.ndim == 2 and data.dtype.kind in "iuf"
    if not isinstance(data, (list, tuple)) or len(data) == 0:
        return False
    first = data[0]
    if isinstance(first, (str, bytes)) or not isinstance(first, (list, tuple, np.ndarray)):
        return False
    if len(first) == 0 or isinstance(first[0], (bool, np.bool_)):
        return False
    return isinstance(first[0], (numbers.Real, np.number))


def _cluster_sizes(assignments: Sequence[int], k: int) -> List[int]:
    return [sum(1 for a in assignments if a == c) for c in range(1, k + 1)]


def _validate(n: int, k: int, method: str) -> str:
    """Check n and k, and return the algorithm to run for ``method``."""
    if n == 0:
        raise EmptyInputError()
    if k < 2 or k > n:
        raise InvalidKError(k, n)
    return method if method == "pam" else resolve_linkage(method)


def _partition(dist: DistanceMatrix, k: int, method: str, cfg: ClusteringConfig) -> List[int]:
    if method == "pam":
        return pam(dist, k, max_swaps=cfg.pam_max_swaps)
    return hierarchical(dist, k, method)


def _finish(
    data: List[List[Any]],
    dist: DistanceMatrix,
    k: int,
    method: str,
    algorithm: str,
    dissimilarity: str,
    cfg: ClusteringConfig,
    metadata: Dict[str, Any],
) -> ClusterResult:
    assignments = _partition(dist, k, algorithm, cfg)
    sil = silhouette_score_precomputed(assignments, dist)
    sizes = _cluster_sizes(assignments, k)
    logger.info(
        "Clustered n=%d into k=%d (%s, %s): sizes=%s silhouette=%.4f",
        len(assignments),
        k,
        method,
        dissimilarity,
        sizes,
        sil,
    )
    return ClusterResult(
        data=data,
        k=k,
        assignments=assignments,
        silhouette=sil,
        sizes=sizes,
        method=method,
        distance=dist,
        dissimilarity=dissimilarity,
        metadata=metadata,
    )


def _resolve_input(
    data: ClusterInput,
    dissimilarity: Optional[str],
    na_syms: Optional[Iterable[Any]],
    weighted: Optional[bool],
    lambda_: Optional[float],
    cfg: ClusteringConfig,
) -> Tuple[List[List[Any]], Callable[[], DistanceMatrix], str, Dict[str, Any]]:
    """
    Resolve input shape and options without computing any distance.

    Returns the rows as given, a callable that builds the distance matrix,
    the resolved metric name and metadata describing the input.
    """
    if not isinstance(data, PreparedSequences) and is_numeric_data(data):
        rows = [[float(v) for v in row] for row in data]
        name = dissimilarity or cfg.numeric_dissimilarity
        if name not in NUMERIC_DISSIMILARITIES:
            raise UnknownDissimilarityError(name, NUMERIC_DISSIMILARITIES)
        return rows, lambda: numeric_distance_matrix(rows, name), name, {"input": "numeric"}

    if isinstance(data, PreparedSequences):
        rows = [list(row) for row in data.sequence_data]
        kind = "prepared"
    else:
        rows = [list(row) for row in data]
        kind = "sequences"

    name = dissimilarity or cfg.sequence_dissimilarity
    if name not in SEQUENCE_DISSIMILARITIES:
        raise UnknownDissimilarityError(name, SEQUENCE_DISSIMILARITIES)
    na_syms = list(cfg.na_syms) if na_syms is None else list(na_syms)
    weighted = cfg.weighted if weighted is None else bool(weighted)
    lambda_ = cfg.lambda_ if lambda_ is None else float(lambda_)

    def build() -> DistanceMatrix:
        sequences = to_token_lists(rows, na_syms)
        return sequence_distance_matrix(sequences, name, weighted, lambda_)

    metadata = {"input": kind, "na_syms": na_syms, "weighted": weighted, "lambda": lambda_}
    return rows, build, name, metadata


def compute_distance(
    data: ClusterInput,
    *,
    dissimilarity: Optional[str] = None,
    na_syms: Optional[Iterable[Any]] = None,
    weighted: Optional[bool] = None,
    lambda_: Optional[float] = None,
    config: Optional[ClusteringConfig] = None,
) -> Tuple[List[List[Any]], DistanceMatrix, str]:
    """
    Build the distance matrix ``cluster_data`` would use for ``data``.

    Returns:
        Tuple of (rows, distance matrix, resolved dissimilarity name)

    Raises:
        EmptyInputError: If there are no observations
        UnknownDissimilarityError: If the metric does not fit the input type
    """
    cfg = config or config_module.config
    rows, build, name, _ = _resolve_input(data, dissimilarity, na_syms, weighted, lambda_, cfg)
    if not rows:
        raise EmptyInputError()
    return rows, build(), name


def cluster_data(
    data: ClusterInput,
    k: int,
    *,
    dissimilarity: Optional[str] = None,
    method: Optional[str] = None,
    na_syms: Optional[Iterable[Any]] = None,
    weighted: Optional[bool] = None,
    lambda_: Optional[float] = None,
    config: Optional[ClusteringConfig] = None,
) -> ClusterResult:
    """
    Cluster sequences or numeric vectors into ``k`` groups.

    Input shape is resolved once:

    - ``PreparedSequences`` → its ``sequence_data`` with sequence metrics
    - numeric matrix (numpy array, or rows starting with a number) →
      ``euclidean`` / ``manhattan``
    - anything else → token sequences with sequence metrics

    Args:
        data: Sequences, prepared container, or numeric rows
        k: Number of clusters, ``2 <= k <= n``
        dissimilarity: Metric name. Defaults to ``hamming`` for sequences and
            ``euclidean`` for numeric data
        method: ``"pam"`` or a linkage name (``single``, ``complete``,
            ``average``, ``mcquitty``, ``median``, ``centroid``, ``ward.D``,
            ``ward.D2``). ``"hierarchical"`` and unrecognized names use
            average linkage; the name is reported as given
        na_syms: Tokens treated as missing besides ``None`` / ``""``.
            Defaults to ``["*", "%"]``
        weighted: Use weighted Hamming
        lambda_: Decay rate for weighted Hamming
        config: Defaults for unset options (module ``config`` if omitted)

    Returns:
        ClusterResult with 1-indexed assignments, sizes, silhouette and the
        distance matrix

    Raises:
        EmptyInputError: If there are no observations
        InvalidKError: If k < 2 or k > n
        UnknownDissimilarityError: If the metric does not fit the input type
    """
    cfg = config or config_module.config
    k = operator.index(k)
    method = method or cfg.method

    rows, build, name, metadata = _resolve_input(
        data, dissimilarity, na_syms, weighted, lambda_, cfg
    )
    algorithm = _validate(len(rows), k, method)
    return _finish(rows, build(), k, method, algorithm, name, cfg, metadata)


def cluster_sequences(
    data: Union[SequenceData, PreparedSequences],
    k: int,
    **options: Any,
) -> ClusterResult:
    """
    Cluster token sequences only; numeric matrices are rejected.

    Accepts the same keyword options as ``cluster_data``.

    Raises:
        TypeError: If ``data`` is a numeric matrix
    """
    if is_numeric_data(data):
        raise TypeError("cluster_sequences expects token sequences; use cluster_data for numeric data")
    return cluster_data(data, k, **options)
