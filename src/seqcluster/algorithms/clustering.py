"""
Clustering algorithms and the silhouette quality score.

Provides Partitioning Around Medoids (PAM), Lance-Williams agglomerative
clustering and silhouette scoring over a precomputed distance matrix.

Tie-breaking is part of the contract: every comparison below uses a specific
``<`` / ``<=`` / ``>=`` so that partitions agree with the reference
implementation on datasets with equal distances. Costs are accumulated
left to right in index order for the same reason.
"""

from __future__ import annotations

from typing import List, Sequence, Union

import numpy as np

from ..exceptions import InvalidKError
from ..utils.logging_config import get_logger
from .distance_matrix import DistanceMatrix

logger = get_logger(__name__)

DistanceLike = Union[DistanceMatrix, np.ndarray, Sequence[Sequence[float]]]

PAM_MAX_SWAPS = 100

LINKAGE_METHODS = (
    "single",
    "complete",
    "average",
    "mcquitty",
    "median",
    "centroid",
    "ward.D",
    "ward.D2",
)
LINKAGE_ALIASES = {"hierarchical": "average"}


def _as_rows(dist: DistanceLike) -> List[List[float]]:
    arr = np.asarray(dist, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Distance matrix must be square, got shape {arr.shape}")
    return arr.tolist()


def _check_k(k: int, n: int) -> None:
    if k < 2 or k > n:
        raise InvalidKError(k, n)


# ------------------------------------------------------------------
# PAM
# ------------------------------------------------------------------


def _assignment_cost(D: List[List[float]], medoids: Sequence[int]) -> float:
    """Sum over points of the distance to the nearest medoid."""
    total = 0.0
    for row in D:
        nearest = float("inf")
        for m in medoids:
            if row[m] < nearest:
                nearest = row[m]
        total += nearest
    return total


def _pam_build(D: List[List[float]], k: int) -> List[int]:
    n = len(D)

    row_sums = []
    for row in D:
        s = 0.0
        for v in row:
            s += v
        row_sums.append(s)

    # Later index wins ties.
    first = 0
    for i in range(1, n):
        if row_sums[i] <= row_sums[first]:
            first = i
    medoids = [first]
    nearest = [D[i][first] for i in range(n)]

    for _ in range(1, k):
        best_gain = float("-inf")
        best_candidate = -1
        for c in range(n):
            if c in medoids:
                continue
            gain = 0.0
            for i in range(n):
                gain += max(0.0, nearest[i] - D[i][c])
            # Later candidate wins ties.
            if gain >= best_gain:
                best_gain = gain
                best_candidate = c
        medoids.append(best_candidate)
        for i in range(n):
            nearest[i] = min(nearest[i], D[i][best_candidate])

    return medoids


def _pam_swap(D: List[List[float]], medoids: List[int], max_swaps: int) -> List[int]:
    n = len(D)
    k = len(medoids)
    medoids = list(medoids)

    for iteration in range(max_swaps):
        current_cost = _assignment_cost(D, medoids)

        best_change = 0.0
        best_slot = -1
        best_swap = -1
        for slot in range(k):
            for c in range(n):
                if c in medoids:
                    continue
                trial = list(medoids)
                trial[slot] = c
                change = _assignment_cost(D, trial) - current_cost
                # Strict improvement only; first best trial is kept.
                if change < best_change:
                    best_change = change
                    best_slot = slot
                    best_swap = c

        if best_slot < 0:
            logger.debug("PAM swap phase converged after %d pass(es)", iteration)
            break
        logger.debug(
            "PAM swap %d: medoid %d -> %d (cost change %.6g)",
            iteration + 1,
            medoids[best_slot],
            best_swap,
            best_change,
        )
        medoids[best_slot] = best_swap

    return medoids


def pam(dist: DistanceLike, k: int, *, max_swaps: int = PAM_MAX_SWAPS) -> List[int]:
    """
    Partitioning Around Medoids over a precomputed distance matrix.

    Build phase picks the point with the smallest total distance, then
    greedily adds the candidate with the largest gain
    ``sum(max(0, nearest(i) - d(i, c)))``; later indices win ties in both
    steps. Swap phase applies the single best strictly improving
    (medoid, non-medoid) exchange per pass, for at most ``max_swaps`` passes.

    Args:
        dist: Square symmetric distance matrix of shape (n, n)
        k: Number of clusters
        max_swaps: Cap on swap passes

    Returns:
        1-indexed cluster ids. Ids follow the ascending order of the medoid
        indices; a point equidistant to several medoids joins the lowest id.

    Raises:
        InvalidKError: If k < 2 or k > n
    """
    D = _as_rows(dist)
    n = len(D)
    _check_k(k, n)

    medoids = _pam_build(D, k)
    logger.debug("PAM build medoids: %s", medoids)
    medoids = _pam_swap(D, medoids, max_swaps)

    sorted_medoids = sorted(medoids)
    assignments = []
    for i in range(n):
        min_d = float("inf")
        best = 0
        for slot, m in enumerate(sorted_medoids):
            if D[i][m] < min_d:
                min_d = D[i][m]
                best = slot
        assignments.append(best + 1)
    return assignments


# ------------------------------------------------------------------
# Hierarchical (Lance-Williams)
# ------------------------------------------------------------------


def resolve_linkage(method: str) -> str:
    """
    Return the canonical linkage name for ``method``.

    ``"hierarchical"`` is accepted as average linkage. Any other name outside
    ``LINKAGE_METHODS`` also falls back to average linkage, with a warning.
    """
    if method in LINKAGE_METHODS:
        return method
    if method in LINKAGE_ALIASES:
        return LINKAGE_ALIASES[method]
    logger.warning(
        "Unrecognized linkage %r, using average linkage (supported: %s)",
        method,
        ", ".join(LINKAGE_METHODS),
    )
    return "average"


def lance_williams(
    method: str,
    d_ik: float,
    d_jk: float,
    d_ij: float,
    n_i: int,
    n_j: int,
    n_k: int,
) -> float:
    """
    Distance from the merged cluster (i ∪ j) to cluster k.

    Args:
        method: Canonical linkage name (see ``LINKAGE_METHODS``)
        d_ik: Distance between clusters i and k
        d_jk: Distance between clusters j and k
        d_ij: Distance between the merged clusters i and j
        n_i: Size of cluster i
        n_j: Size of cluster j
        n_k: Size of cluster k

    Returns:
        Updated distance d(i ∪ j, k)
    """
    if method == "single":
        return min(d_ik, d_jk)
    if method == "complete":
        return max(d_ik, d_jk)
    if method == "mcquitty":
        return (d_ik + d_jk) / 2
    if method == "median":
        return (d_ik + d_jk) / 2 - d_ij / 4
    if method == "centroid":
        n_ij = n_i + n_j
        return (n_i * d_ik + n_j * d_jk) / n_ij - (n_i * n_j * d_ij) / (n_ij * n_ij)
    if method in ("ward.D", "ward.D2"):
        return ((n_i + n_k) * d_ik + (n_j + n_k) * d_jk - n_k * d_ij) / (n_i + n_j + n_k)
    # average; also the fallback for any other name
    return (n_i * d_ik + n_j * d_jk) / (n_i + n_j)


def hierarchical(dist: DistanceLike, k: int, method: str = "average") -> List[int]:
    """
    Agglomerative clustering cut at ``k`` clusters.

    Clusters are identified by the original index of their first member.
    The working table is indexed by those ids and only the surviving id's
    row and column change after a merge; the absorbed id is retired from
    the active list. ``ward.D2`` squares all distances once up front.

    Args:
        dist: Square symmetric distance matrix of shape (n, n)
        k: Number of clusters to stop at
        method: Linkage rule name. ``"hierarchical"`` and unrecognized names
            use average linkage

    Returns:
        1-indexed cluster ids, numbered in ascending order of surviving ids

    Raises:
        InvalidKError: If k < 2 or k > n
    """
    method = resolve_linkage(method)
    d = _as_rows(dist)
    n = len(d)
    _check_k(k, n)

    if method == "ward.D2":
        d = [[v * v for v in row] for row in d]

    members = [[i] for i in range(n)]
    sizes = [1] * n
    active = list(range(n))

    while len(active) > k:
        best_dist = float("inf")
        best_i = best_j = -1
        for a in range(len(active)):
            ci = active[a]
            row = d[ci]
            for b in range(a + 1, len(active)):
                cj = active[b]
                # First pair found wins ties.
                if row[cj] < best_dist:
                    best_dist = row[cj]
                    best_i, best_j = ci, cj

        n_i, n_j = sizes[best_i], sizes[best_j]
        d_ij = d[best_i][best_j]
        updated = {
            ck: lance_williams(
                method, d[best_i][ck], d[best_j][ck], d_ij, n_i, n_j, sizes[ck]
            )
            for ck in active
            if ck != best_i and ck != best_j
        }
        for ck, value in updated.items():
            d[best_i][ck] = value
            d[ck][best_i] = value

        members[best_i] = members[best_i] + members[best_j]
        sizes[best_i] = n_i + n_j
        active.remove(best_j)
        logger.debug(
            "%s merge %d <- %d at %.6g (%d clusters left)",
            method,
            best_i,
            best_j,
            best_dist,
            len(active),
        )

    assignments = [0] * n
    for label, cid in enumerate(active, start=1):
        for point in members[cid]:
            assignments[point] = label
    return assignments


# ------------------------------------------------------------------
# Silhouette
# ------------------------------------------------------------------


def silhouette_samples_precomputed(labels: Sequence[int], dist: DistanceLike) -> np.ndarray:
    """
    Per-observation silhouette coefficients from a precomputed distance matrix.

    Members of singleton clusters get 0, as do points with
    ``max(a, b) == 0``.

    Args:
        labels: Cluster assignments
        dist: Precomputed distance matrix of shape (n_samples, n_samples)

    Returns:
        Array of shape (n_samples,) with values in [-1, 1]
    """
    labels = np.asarray(labels)
    dist = np.asarray(dist, dtype=np.float64)
    n = len(labels)
    unique = np.unique(labels)

    sil = np.zeros(n, dtype=np.float64)
    if len(unique) < 2:
        return sil

    for i in range(n):
        same_mask = labels == labels[i]
        same_count = same_mask.sum()
        if same_count <= 1:
            continue
        a = dist[i, same_mask].sum() / (same_count - 1)
        b = np.inf
        for c in unique:
            if c == labels[i]:
                continue
            other_mask = labels == c
            if other_mask.sum() == 0:
                continue
            b = min(b, dist[i, other_mask].mean())
        denom = max(a, b)
        sil[i] = (b - a) / denom if denom > 0 else 0.0
    return sil


def silhouette_score_precomputed(labels: Sequence[int], dist: DistanceLike) -> float:
    """
    Compute silhouette score using precomputed distance matrix.

    Silhouette score measures how well-separated clusters are.
    Higher is better (range [-1, 1]).

    Args:
        labels: Cluster assignments
        dist: Precomputed distance matrix of shape (n_samples, n_samples)

    Returns:
        Mean silhouette score, or 0.0 with fewer than two distinct clusters
    """
    if len(labels) == 0 or len(np.unique(np.asarray(labels))) < 2:
        return 0.0
    return float(np.mean(silhouette_samples_precomputed(labels, dist)))
