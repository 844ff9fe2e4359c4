"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import logging

import pytest

from seqcluster.config import ClusteringConfig
from seqcluster.utils.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def six_sequences():
    """
    Six length-3 sequences over {A, B, C}.

    Reference partitions and silhouettes for this set are used across the
    clustering tests.
    """
    return [
        ["A", "B", "C"],
        ["C", "A", "B"],
        ["A", "B", "A"],
        ["B", "C", "A"],
        ["A", "C", "B"],
        ["C", "B", "A"],
    ]


@pytest.fixture
def hamming_six():
    """Hamming distance matrix of ``six_sequences``."""
    return [
        [0, 3, 1, 3, 2, 2],
        [3, 0, 3, 3, 2, 2],
        [1, 3, 0, 2, 2, 1],
        [3, 3, 2, 0, 2, 2],
        [2, 2, 2, 2, 0, 3],
        [2, 2, 1, 2, 3, 0],
    ]


@pytest.fixture
def well_separated_points():
    """Two tight groups of three 2-D points, far apart."""
    return [
        [0, 0], [0.1, 0.1], [0.2, 0],
        [10, 10], [10.1, 10.2], [9.9, 10],
    ]


@pytest.fixture
def default_config():
    """ClusteringConfig with library defaults, independent of the environment."""
    return ClusteringConfig()


@pytest.fixture
def clean_package_logger():
    """Restore the package logger's handlers and level after a test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def canonicalize(assignments):
    """Relabel so the first-seen cluster is 1, the second 2, and so on."""
    mapping = {}
    out = []
    for a in assignments:
        if a not in mapping:
            mapping[a] = len(mapping) + 1
        out.append(mapping[a])
    return out


@pytest.fixture
def canon():
    """Fixture form of ``canonicalize`` for partition comparisons."""
    return canonicalize
