"""
Tests for logging helpers.
"""

import logging

from seqcluster.utils.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


def test_get_logger_namespaces_names():
    assert get_logger("worker").name == "seqcluster.worker"
    assert get_logger("seqcluster.algorithms.cluster").name == "seqcluster.algorithms.cluster"
    assert get_logger(ROOT_LOGGER_NAME).name == "seqcluster"


def test_setup_logging_sets_level(clean_package_logger):
    logger = setup_logging("debug")
    assert logger is clean_package_logger
    assert logger.level == logging.DEBUG


def test_setup_logging_is_idempotent(clean_package_logger):
    setup_logging("INFO")
    setup_logging("WARNING", fmt="%(message)s")
    marked = [h for h in clean_package_logger.handlers if getattr(h, "_seqcluster_handler", False)]
    assert len(marked) == 1
    assert marked[0].formatter._fmt == "%(message)s"
    assert clean_package_logger.level == logging.WARNING


def test_setup_logging_defaults_to_config(clean_package_logger, monkeypatch):
    from seqcluster import config as config_module

    monkeypatch.setattr(config_module.config, "log_level", "ERROR")
    setup_logging()
    assert clean_package_logger.level == logging.ERROR
