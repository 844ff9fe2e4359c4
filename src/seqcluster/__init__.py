"""
seqcluster - Core Package

Clustering of categorical sequences and numeric vectors.

This package provides:
- Sequence and numeric dissimilarity measures
- PAM and Lance-Williams hierarchical clustering
- Silhouette scoring and K sweeps
"""

__version__ = "0.1.0"

from .algorithms import (
    ClusterResult,
    PreparedSequences,
    SweepConfig,
    SweepResult,
    cluster_data,
    cluster_sequences,
    prepare_data,
    run_sweep,
)
from .config import ClusteringConfig
from .exceptions import (
    ClusteringError,
    EmptyInputError,
    InvalidKError,
    UnknownDissimilarityError,
)

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import utils

__all__ = [
    "ClusterResult",
    "PreparedSequences",
    "SweepConfig",
    "SweepResult",
    "cluster_data",
    "cluster_sequences",
    "prepare_data",
    "run_sweep",
    "ClusteringConfig",
    "ClusteringError",
    "EmptyInputError",
    "InvalidKError",
    "UnknownDissimilarityError",
    "algorithms",
    "utils",
]
