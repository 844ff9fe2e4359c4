"""
Pairwise dissimilarity measures for token sequences and numeric vectors.

Sequence measures take two canonical token lists (see ``sequences``) and,
for the length-sensitive ones, the effective length of each list. Only the
first ``len_a`` / ``len_b`` tokens are compared, so trailing missing padding
never inflates a distance. When a length is omitted the full list is used.

Levenshtein and OSA use an inverted substitution cost (a matching pair of
tokens costs 1, a mismatch 0) while Damerau-Levenshtein uses the ordinary
cost. The reference values these functions reproduce depend on both
conventions; do not unify them.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from .sequences import SENTINEL, Token

TokenList = Sequence[Token]
SequenceMetric = Callable[..., float]
NumericMetric = Callable[[Sequence[float], Sequence[float]], float]


def _lengths(a: TokenList, b: TokenList, len_a: Optional[int], len_b: Optional[int]):
    return (len(a) if len_a is None else len_a, len(b) if len_b is None else len_b)


# ------------------------------------------------------------------
# Position-wise
# ------------------------------------------------------------------


def hamming(
    a: TokenList,
    b: TokenList,
    weighted: bool = False,
    lambda_: float = 1.0,
) -> float:
    """
    Hamming distance over the full (padded) sequences.

    The shorter sequence is padded with SENTINEL. With ``weighted=True`` a
    mismatch at 0-based position ``i`` contributes ``exp(-lambda_ * i)``
    instead of 1.

    Args:
        a: First canonical token list
        b: Second canonical token list
        weighted: Apply exponential position decay
        lambda_: Decay rate for the weighted variant

    Returns:
        Count (or weighted sum) of mismatching positions
    """
    max_len = max(len(a), len(b))
    dist = 0.0
    for i in range(max_len):
        ta = a[i] if i < len(a) else SENTINEL
        tb = b[i] if i < len(b) else SENTINEL
        if ta != tb:
            dist += math.exp(-lambda_ * i) if weighted else 1.0
    return dist


# ------------------------------------------------------------------
# Edit distances
# ------------------------------------------------------------------


def levenshtein(
    a: TokenList, b: TokenList, len_a: Optional[int] = None, len_b: Optional[int] = None
) -> float:
    """Levenshtein distance with inverted substitution cost (match=1, mismatch=0)."""
    m, n = _lengths(a, b, len_a, len_b)

    prev = list(range(n + 1))
    for i in range(1, m + 1):
        curr = [i] + [0] * n
        ai = a[i - 1]
        for j in range(1, n + 1):
            cost = 1 if ai == b[j - 1] else 0
            curr[j] = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
        prev = curr
    return float(prev[n])


def osa(
    a: TokenList, b: TokenList, len_a: Optional[int] = None, len_b: Optional[int] = None
) -> float:
    """
    Optimal string alignment distance.

    Substitution and adjacent transposition both use the inverted cost
    (match=1, mismatch=0), like ``levenshtein``.
    """
    m, n = _lengths(a, b, len_a, len_b)
    if m == 0:
        return float(n)
    if n == 0:
        return float(m)

    d = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        d[i][0] = i
    for j in range(n + 1):
        d[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 1 if a[i - 1] == b[j - 1] else 0
            d[i][j] = min(d[i - 1][j] + 1, d[i][j - 1] + 1, d[i - 1][j - 1] + cost)
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                d[i][j] = min(d[i][j], d[i - 2][j - 2] + cost)
    return float(d[m][n])


def damerau_levenshtein(
    a: TokenList, b: TokenList, len_a: Optional[int] = None, len_b: Optional[int] = None
) -> float:
    """
    Unrestricted Damerau-Levenshtein distance (match=0, mismatch=1).

    Keeps the last row in which each token was seen so the transposition
    candidate is found in O(1).
    """
    m, n = _lengths(a, b, len_a, len_b)
    if m == 0:
        return float(n)
    if n == 0:
        return float(m)

    max_dist = m + n
    # Row/column 0 hold the max_dist border; the usual DP starts at index 1.
    d = [[0] * (n + 2) for _ in range(m + 2)]
    d[0][0] = max_dist
    for i in range(m + 1):
        d[i + 1][0] = max_dist
        d[i + 1][1] = i
    for j in range(n + 1):
        d[0][j + 1] = max_dist
        d[1][j + 1] = j

    last_row: Dict[Token, int] = {}
    for i in range(1, m + 1):
        last_match_col = 0
        for j in range(1, n + 1):
            i1 = last_row.get(b[j - 1], 0)
            j1 = last_match_col
            cost = 0 if a[i - 1] == b[j - 1] else 1
            if cost == 0:
                last_match_col = j
            d[i + 1][j + 1] = min(
                d[i][j] + cost,
                d[i + 1][j] + 1,
                d[i][j + 1] + 1,
                d[i1][j1] + (i - i1 - 1) + 1 + (j - j1 - 1),
            )
        last_row[a[i - 1]] = i
    return float(d[m + 1][n + 1])


def lcs(
    a: TokenList, b: TokenList, len_a: Optional[int] = None, len_b: Optional[int] = None
) -> float:
    """Longest-common-subsequence distance: ``max(m, n) - LCS``."""
    m, n = _lengths(a, b, len_a, len_b)
    prev = [0] * (n + 1)
    for i in range(1, m + 1):
        curr = [0] * (n + 1)
        ai = a[i - 1]
        for j in range(1, n + 1):
            if ai == b[j - 1]:
                curr[j] = prev[j - 1] + 1
            else:
                curr[j] = max(prev[j], curr[j - 1])
        prev = curr
    return float(max(m, n) - prev[n])


# ------------------------------------------------------------------
# Profile-based
# ------------------------------------------------------------------


def qgram_profile(tokens: TokenList, length: Optional[int] = None, q: int = 1) -> Counter:
    """Count the length-``q`` windows of the first ``length`` tokens."""
    n = len(tokens) if length is None else length
    return Counter(tuple(tokens[i:i + q]) for i in range(0, n - q + 1))


def qgram(
    a: TokenList,
    b: TokenList,
    len_a: Optional[int] = None,
    len_b: Optional[int] = None,
    q: int = 1,
) -> float:
    """L1 distance between q-gram count profiles."""
    pa = qgram_profile(a, len_a, q)
    pb = qgram_profile(b, len_b, q)
    return float(sum(abs(pa[key] - pb[key]) for key in pa.keys() | pb.keys()))


def cosine(
    a: TokenList,
    b: TokenList,
    len_a: Optional[int] = None,
    len_b: Optional[int] = None,
    q: int = 1,
) -> float:
    """One minus the cosine similarity of q-gram profiles (1 if either is empty)."""
    pa = qgram_profile(a, len_a, q)
    pb = qgram_profile(b, len_b, q)

    dot = sum(pa[key] * pb[key] for key in pa.keys() & pb.keys())
    norm_a = sum(v * v for v in pa.values())
    norm_b = sum(v * v for v in pb.values())
    if norm_a == 0 or norm_b == 0:
        return 1.0
    return 1.0 - dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


def jaccard(
    a: TokenList,
    b: TokenList,
    len_a: Optional[int] = None,
    len_b: Optional[int] = None,
    q: int = 1,
) -> float:
    """One minus the Jaccard index of the q-gram supports (0 if both are empty)."""
    set_a = set(qgram_profile(a, len_a, q))
    set_b = set(qgram_profile(b, len_b, q))
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return 1.0 - len(set_a & set_b) / union


# ------------------------------------------------------------------
# Jaro / Jaro-Winkler
# ------------------------------------------------------------------


def jaro_winkler(
    a: TokenList,
    b: TokenList,
    len_a: Optional[int] = None,
    len_b: Optional[int] = None,
    p: float = 0.0,
) -> float:
    """
    Jaro distance, or Jaro-Winkler distance when ``p > 0``.

    Matches are searched within ``max(0, max(m, n) // 2 - 1)`` positions.
    With ``p > 0`` the similarity gets the Winkler bonus for a common prefix
    of up to four tokens.

    Args:
        a: First canonical token list
        b: Second canonical token list
        len_a: Effective length of ``a``
        len_b: Effective length of ``b``
        p: Prefix scaling factor (0 gives plain Jaro)

    Returns:
        ``1 - similarity`` in [0, 1]
    """
    m, n = _lengths(a, b, len_a, len_b)
    if m == 0 and n == 0:
        return 0.0
    if m == 0 or n == 0:
        return 1.0

    window = max(0, max(m, n) // 2 - 1)
    a_matched = [False] * m
    b_matched = [False] * n
    matches = 0

    for i in range(m):
        lo = max(0, i - window)
        hi = min(n - 1, i + window)
        for j in range(lo, hi + 1):
            if not b_matched[j] and a[i] == b[j]:
                a_matched[i] = True
                b_matched[j] = True
                matches += 1
                break

    if matches == 0:
        return 1.0

    transpositions = 0
    j = 0
    for i in range(m):
        if not a_matched[i]:
            continue
        while not b_matched[j]:
            j += 1
        if a[i] != b[j]:
            transpositions += 1
        j += 1

    sim = (matches / m + matches / n + (matches - transpositions / 2) / matches) / 3
    if p == 0:
        return 1.0 - sim

    prefix = 0
    for i in range(min(4, m, n)):
        if a[i] != b[i]:
            break
        prefix += 1
    return 1.0 - (sim + prefix * p * (1.0 - sim))


# ------------------------------------------------------------------
# Numeric vectors
# ------------------------------------------------------------------


def euclidean(x: Sequence[float], y: Sequence[float]) -> float:
    """Euclidean distance between two equal-length vectors."""
    diff = np.asarray(x, dtype=np.float64) - np.asarray(y, dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))


def manhattan(x: Sequence[float], y: Sequence[float]) -> float:
    """Manhattan (L1) distance between two equal-length vectors."""
    diff = np.asarray(x, dtype=np.float64) - np.asarray(y, dtype=np.float64)
    return float(np.sum(np.abs(diff)))


# Names accepted by the ``dissimilarity`` option. Hamming is handled
# separately because it works on padded full-length sequences.
SEQUENCE_DISSIMILARITIES: Dict[str, SequenceMetric] = {
    "hamming": hamming,
    "lv": levenshtein,
    "osa": osa,
    "dl": damerau_levenshtein,
    "lcs": lcs,
    "qgram": qgram,
    "cosine": cosine,
    "jaccard": jaccard,
    "jw": jaro_winkler,
}

NUMERIC_DISSIMILARITIES: Dict[str, NumericMetric] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
}
