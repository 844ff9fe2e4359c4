"""
Tests for environment-driven configuration.
"""

import pytest

from seqcluster.config import DEFAULT_NA_SYMS, ClusteringConfig, config


def test_defaults():
    cfg = ClusteringConfig()
    assert cfg.sequence_dissimilarity == "hamming"
    assert cfg.numeric_dissimilarity == "euclidean"
    assert cfg.method == "pam"
    assert cfg.na_syms == ["*", "%"]
    assert cfg.weighted is False
    assert cfg.lambda_ == 1.0
    assert cfg.pam_max_swaps == 100
    assert cfg.log_level == "WARNING"


def test_na_syms_default_not_shared():
    cfg = ClusteringConfig()
    cfg.na_syms.append("?")
    assert DEFAULT_NA_SYMS == ["*", "%"]
    assert ClusteringConfig().na_syms == ["*", "%"]


def test_from_env_empty_mapping():
    assert ClusteringConfig.from_env({}) == ClusteringConfig()


def test_from_env_reads_all_variables():
    env = {
        "SEQCLUSTER_SEQUENCE_DISSIMILARITY": "lcs",
        "SEQCLUSTER_NUMERIC_DISSIMILARITY": "manhattan",
        "SEQCLUSTER_METHOD": "ward.D2",
        "SEQCLUSTER_NA_SYMS": "NA, ?",
        "SEQCLUSTER_WEIGHTED": "true",
        "SEQCLUSTER_LAMBDA": "0.5",
        "SEQCLUSTER_PAM_MAX_SWAPS": "10",
        "SEQCLUSTER_LOG_LEVEL": "debug",
    }
    cfg = ClusteringConfig.from_env(env)
    assert cfg.sequence_dissimilarity == "lcs"
    assert cfg.numeric_dissimilarity == "manhattan"
    assert cfg.method == "ward.D2"
    assert cfg.na_syms == ["NA", "?"]
    assert cfg.weighted is True
    assert cfg.lambda_ == 0.5
    assert cfg.pam_max_swaps == 10
    assert cfg.log_level == "DEBUG"


def test_from_env_empty_na_syms_disables_defaults():
    cfg = ClusteringConfig.from_env({"SEQCLUSTER_NA_SYMS": ""})
    assert cfg.na_syms == []


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("SEQCLUSTER_METHOD", "complete")
    assert ClusteringConfig.from_env().method == "complete"


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("off", False), ("0", False)])
def test_weighted_flag_parsing(raw, expected):
    cfg = ClusteringConfig.from_env({"SEQCLUSTER_WEIGHTED": raw})
    assert cfg.weighted is expected


def test_invalid_weighted_flag():
    with pytest.raises(ValueError, match="SEQCLUSTER_WEIGHTED"):
        ClusteringConfig.from_env({"SEQCLUSTER_WEIGHTED": "maybe"})


def test_invalid_max_swaps():
    with pytest.raises(ValueError, match="SEQCLUSTER_PAM_MAX_SWAPS"):
        ClusteringConfig.from_env({"SEQCLUSTER_PAM_MAX_SWAPS": "many"})
    with pytest.raises(ValueError, match="pam_max_swaps"):
        ClusteringConfig(pam_max_swaps=0)


def test_invalid_lambda():
    with pytest.raises(ValueError, match="lambda"):
        ClusteringConfig.from_env({"SEQCLUSTER_LAMBDA": "fast"})


def test_module_config_instance():
    assert isinstance(config, ClusteringConfig)
