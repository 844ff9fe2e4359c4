"""
Algorithm Core Library - sequence dissimilarities and clustering.

Dissimilarity measures, distance matrices, PAM and Lance-Williams
hierarchical clustering, silhouette scoring, the ``cluster_data`` entry
point and K sweeps. Plain numpy, no I/O.
"""

from .sequences import (
    SENTINEL,
    PreparedSequences,
    effective_length,
    is_missing,
    prepare_data,
    to_token_lists,
)
from .dissimilarity import (
    NUMERIC_DISSIMILARITIES,
    SEQUENCE_DISSIMILARITIES,
    cosine,
    damerau_levenshtein,
    euclidean,
    hamming,
    jaccard,
    jaro_winkler,
    lcs,
    levenshtein,
    manhattan,
    osa,
    qgram,
)
from .distance_matrix import DistanceMatrix, numeric_distance_matrix, sequence_distance_matrix
from .clustering import (
    LINKAGE_METHODS,
    hierarchical,
    lance_williams,
    pam,
    silhouette_samples_precomputed,
    silhouette_score_precomputed,
)
from .cluster import ClusterResult, cluster_data, cluster_sequences, compute_distance
from .sweep import SweepConfig, SweepResult, run_sweep

__all__ = [
    # Sequences
    "SENTINEL",
    "PreparedSequences",
    "effective_length",
    "is_missing",
    "prepare_data",
    "to_token_lists",
    # Dissimilarities
    "NUMERIC_DISSIMILARITIES",
    "SEQUENCE_DISSIMILARITIES",
    "cosine",
    "damerau_levenshtein",
    "euclidean",
    "hamming",
    "jaccard",
    "jaro_winkler",
    "lcs",
    "levenshtein",
    "manhattan",
    "osa",
    "qgram",
    # Distance matrices
    "DistanceMatrix",
    "numeric_distance_matrix",
    "sequence_distance_matrix",
    # Clustering
    "LINKAGE_METHODS",
    "hierarchical",
    "lance_williams",
    "pam",
    "silhouette_samples_precomputed",
    "silhouette_score_precomputed",
    # Entry points
    "ClusterResult",
    "cluster_data",
    "cluster_sequences",
    "compute_distance",
    # Sweep orchestration
    "SweepConfig",
    "SweepResult",
    "run_sweep",
]
