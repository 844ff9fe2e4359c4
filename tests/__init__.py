"""
Test suite for seqcluster.

This package contains all tests organized by component:
- test_algorithms/: Dissimilarities, distance matrices, clustering, sweeps
- test_config.py: Environment-driven configuration
- test_logging.py: Logger namespace and handler setup
"""
