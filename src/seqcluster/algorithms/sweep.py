"""
Sweep orchestration for clustering across multiple K values.

The distance matrix is built once and reused for every K, so comparing
partitions across K costs one matrix plus one PAM / hierarchical run per K.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .. import config as config_module
from ..config import ClusteringConfig
from ..exceptions import InvalidKError
from ..utils.logging_config import get_logger
from .cluster import ClusterInput, compute_distance
from .clustering import hierarchical, pam, resolve_linkage, silhouette_score_precomputed
from .distance_matrix import DistanceMatrix

logger = get_logger(__name__)


@dataclass
class SweepConfig:
    """Configuration for clustering sweep."""

    k_min: int = 2
    k_max: int = 10
    method: str = "pam"  # "pam" or a linkage name
    dissimilarity: Optional[str] = None  # None: hamming / euclidean by input type
    na_syms: Optional[List[str]] = None
    weighted: Optional[bool] = None
    lambda_: Optional[float] = None
    pam_max_swaps: Optional[int] = None  # None: ClusteringConfig.pam_max_swaps


@dataclass
class SweepResult:
    """Results from a clustering sweep."""

    dissimilarity: str
    method: str
    by_k: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    dist: Optional[DistanceMatrix] = None

    def silhouettes(self) -> Dict[int, float]:
        """Silhouette score per K, in ascending K order."""
        return {int(k): entry["silhouette"] for k, entry in self.by_k.items()}


def run_sweep(
    data: ClusterInput,
    cfg: SweepConfig,
    *,
    config: Optional[ClusteringConfig] = None,
) -> SweepResult:
    """
    Run clustering for every K in ``[k_min..min(k_max, n)]``.

    Choosing a K from the results is left to the caller; ``silhouettes()``
    gives the usual starting point.

    Args:
        data: Sequences, prepared container, or numeric rows
        cfg: SweepConfig with the K range and clustering options
        config: Defaults for options ``cfg`` leaves unset

    Returns:
        SweepResult with the shared distance matrix and, per K (as a string
        key), ``assignments``, ``sizes`` and ``silhouette``

    Raises:
        ValueError: If k_min > k_max
        InvalidKError: If k_min < 2 or k_min > n
        EmptyInputError: If there are no observations
        UnknownDissimilarityError: If the metric does not fit the input type
    """
    if cfg.k_min > cfg.k_max:
        raise ValueError(f"k_min ({cfg.k_min}) must be <= k_max ({cfg.k_max})")
    if cfg.k_min < 2:
        raise InvalidKError(cfg.k_min, cfg.k_max)
    settings = config or config_module.config
    algorithm = cfg.method if cfg.method == "pam" else resolve_linkage(cfg.method)
    max_swaps = settings.pam_max_swaps if cfg.pam_max_swaps is None else cfg.pam_max_swaps

    rows, dist, dissimilarity = compute_distance(
        data,
        dissimilarity=cfg.dissimilarity,
        na_syms=cfg.na_syms,
        weighted=cfg.weighted,
        lambda_=cfg.lambda_,
        config=settings,
    )
    n_samples = len(rows)
    if cfg.k_min > n_samples:
        raise InvalidKError(cfg.k_min, n_samples)

    by_k: Dict[str, Dict[str, Any]] = {}
    for K in range(cfg.k_min, min(cfg.k_max, n_samples) + 1):
        if algorithm == "pam":
            labels = pam(dist, K, max_swaps=max_swaps)
        else:
            labels = hierarchical(dist, K, algorithm)
        sil = silhouette_score_precomputed(labels, dist)
        by_k[str(K)] = {
            "assignments": labels,
            "sizes": [labels.count(c) for c in range(1, K + 1)],
            "silhouette": sil,
        }
        logger.debug("Sweep K=%d: silhouette=%.4f", K, sil)

    logger.info(
        "Sweep over K=%d..%d (%s, %s) on n=%d",
        cfg.k_min,
        min(cfg.k_max, n_samples),
        cfg.method,
        dissimilarity,
        n_samples,
    )
    return SweepResult(
        dissimilarity=dissimilarity,
        method=cfg.method,
        by_k=by_k,
        dist=dist,
    )
