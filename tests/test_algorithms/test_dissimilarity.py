"""
Tests for pairwise dissimilarity measures.
"""

import math

import numpy as np
import pytest

from seqcluster.algorithms.dissimilarity import (
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
    qgram_profile,
)
from seqcluster.algorithms.sequences import SENTINEL

ABC = ["A", "B", "C"]
CAB = ["C", "A", "B"]
ABA = ["A", "B", "A"]
ACB = ["A", "C", "B"]
CBA = ["C", "B", "A"]


# ------------------------------------------------------------------
# Hamming
# ------------------------------------------------------------------


def test_hamming_counts_mismatches():
    assert hamming(ABC, ABA) == 1.0
    assert hamming(ABC, CAB) == 3.0
    assert hamming(ABC, ABC) == 0.0


def test_hamming_pads_shorter_sequence():
    """Positions past the end of the shorter sequence count as mismatches."""
    assert hamming(["A", "B"], ABC) == 1.0
    assert hamming([], ABC) == 3.0


def test_hamming_missing_tokens_match_each_other():
    """Two missing tokens at the same position are equal."""
    assert hamming(["A", SENTINEL], ["A", SENTINEL]) == 0.0
    assert hamming(["A", SENTINEL], ["A"]) == 0.0
    assert hamming(["A", SENTINEL], ["A", "B"]) == 1.0


def test_hamming_weighted():
    """Mismatch at position i contributes exp(-lambda * i)."""
    expected = 1.0 + math.exp(-1.0) + math.exp(-2.0)
    assert hamming(ABC, CAB, weighted=True, lambda_=1.0) == pytest.approx(expected)
    assert hamming(ABC, CAB, weighted=True, lambda_=1.0) == pytest.approx(1.503214724408055)


def test_hamming_weighted_lambda_zero_equals_unweighted():
    assert hamming(ABC, CBA, weighted=True, lambda_=0.0) == hamming(ABC, CBA)


# ------------------------------------------------------------------
# Edit distances
# ------------------------------------------------------------------


def test_levenshtein_match_costs_one():
    """A diagonal step over equal tokens costs 1, over different tokens 0."""
    assert levenshtein(ABC, ABA) == 2.0


def test_levenshtein_equal_sequences_keep_match_cost():
    """Matching diagonal steps still cost 1, so equal sequences are not at 0."""
    assert levenshtein(ABC, list(ABC)) == 2.0
    assert levenshtein(["A", "B"], ["A", "B"]) == 2.0
    assert levenshtein(ABC, ABC + [SENTINEL], 3, 3) == 2.0


def test_levenshtein_empty():
    assert levenshtein([], ["A", "B"]) == 2.0
    assert levenshtein(["A", "B"], []) == 2.0


def test_osa_empty_and_equal():
    assert osa([], ABC) == 3.0
    assert osa(ABC, []) == 3.0
    assert osa(ABC, list(ABC)) == 2.0


def test_osa_uses_effective_lengths():
    """Tokens past the effective length are ignored."""
    assert osa(["A", "B", SENTINEL], [], 2, 0) == 2.0


def test_damerau_levenshtein_transposition():
    assert damerau_levenshtein(["A", "B"], ["B", "A"]) == 1.0
    assert damerau_levenshtein(ABC, ACB) == 1.0


def test_damerau_levenshtein_conventional_cost():
    assert damerau_levenshtein(ABC, ABC) == 0.0
    assert damerau_levenshtein(ABC, ABA) == 1.0
    assert damerau_levenshtein(ABC, CAB) == 2.0
    assert damerau_levenshtein([], ABC) == 3.0


def test_lcs_distance():
    """max(m, n) minus the longest common subsequence."""
    assert lcs(ABC, CAB) == 1.0
    assert lcs(ABC, CBA) == 2.0
    assert lcs(ABC, ABC) == 0.0
    assert lcs(["A"], ABC) == 2.0


# ------------------------------------------------------------------
# Profile-based
# ------------------------------------------------------------------


def test_qgram_profile_unigrams():
    profile = qgram_profile(ABA)
    assert profile[("A",)] == 2
    assert profile[("B",)] == 1


def test_qgram_profile_respects_length():
    profile = qgram_profile(["A", "B", SENTINEL], length=2)
    assert SENTINEL not in {key[0] for key in profile}


def test_qgram_profile_bigrams():
    profile = qgram_profile(ABC, q=2)
    assert set(profile) == {("A", "B"), ("B", "C")}


def test_qgram_distance():
    assert qgram(ABC, ABA) == 2.0
    assert qgram(ABC, CBA) == 0.0


def test_cosine_distance():
    assert cosine(ABC, ABA) == pytest.approx(0.225403330758517)
    assert cosine(ABC, CBA) == pytest.approx(0.0, abs=1e-12)


def test_cosine_empty_profile_is_one():
    assert cosine([], ABC) == 1.0
    assert cosine([SENTINEL], ABC, 0, 3) == 1.0


def test_jaccard_distance():
    assert jaccard(ABC, ABA) == pytest.approx(1 / 3)
    assert jaccard(ABC, CAB) == 0.0
    assert jaccard(["A"], ["B"]) == 1.0


def test_jaccard_both_empty_is_zero():
    assert jaccard([], []) == 0.0


# ------------------------------------------------------------------
# Jaro
# ------------------------------------------------------------------


def test_jaro_distance():
    assert jaro_winkler(ABC, ABA) == pytest.approx(2 / 9)
    assert jaro_winkler(ABC, ACB) == pytest.approx(4 / 9)
    # window is 0 for length 3, so no positions line up
    assert jaro_winkler(ABC, CAB) == 1.0


def test_jaro_empty():
    assert jaro_winkler([], []) == 0.0
    assert jaro_winkler([], ABC) == 1.0


def test_jaro_winkler_prefix_bonus():
    """A common prefix lowers the distance when p > 0."""
    plain = jaro_winkler(ABC, ABA)
    boosted = jaro_winkler(ABC, ABA, p=0.1)
    # similarity 7/9, prefix 2: 7/9 + 2 * 0.1 * 2/9
    assert boosted == pytest.approx(1 - (7 / 9 + 0.2 * 2 / 9))
    assert boosted < plain


# ------------------------------------------------------------------
# Numeric
# ------------------------------------------------------------------


def test_euclidean():
    assert euclidean([0, 0], [3, 4]) == pytest.approx(5.0)
    assert euclidean(np.array([1.0, 1.0]), np.array([1.0, 1.0])) == 0.0


def test_manhattan():
    assert manhattan([0, 0], [3, 4]) == pytest.approx(7.0)
    assert manhattan([1, -1], [-1, 1]) == pytest.approx(4.0)


# ------------------------------------------------------------------
# Registries
# ------------------------------------------------------------------


def test_registries():
    assert set(SEQUENCE_DISSIMILARITIES) == {
        "hamming", "lv", "osa", "dl", "lcs", "qgram", "cosine", "jaccard", "jw",
    }
    assert set(NUMERIC_DISSIMILARITIES) == {"euclidean", "manhattan"}


@pytest.mark.parametrize("name", ["lv", "osa", "dl", "lcs", "qgram", "cosine", "jaccard", "jw"])
def test_sequence_metrics_symmetric(name):
    func = SEQUENCE_DISSIMILARITIES[name]
    assert func(ABC, CBA, 3, 3) == pytest.approx(func(CBA, ABC, 3, 3))
    assert func(ABA, ACB, 3, 3) == pytest.approx(func(ACB, ABA, 3, 3))
