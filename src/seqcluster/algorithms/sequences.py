"""
Sequence normalisation and the prepared-sequence container.

Raw sequences are lists of category labels in which ``None``, empty strings,
NaN and any declared NA symbol mean "missing". Before distances are computed
every sequence is mapped to a canonical token list in which all missing
tokens are the same private ``SENTINEL``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence

Token = Hashable
SequenceData = List[List[Optional[Token]]]


class _Missing:
    """Singleton marker for a missing token. Equal only to itself."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<NA>"

    def __reduce__(self):
        return (_Missing, ())


SENTINEL = _Missing()


def is_missing(token: Any) -> bool:
    """Return ``True`` for ``None``, ``""`` and float NaN."""
    if token is None or token is SENTINEL:
        return True
    if isinstance(token, str):
        return token == ""
    if isinstance(token, float):
        return math.isnan(token)
    return False


def to_token_lists(
    data: Iterable[Sequence[Optional[Token]]],
    na_syms: Optional[Iterable[Token]] = None,
) -> List[List[Token]]:
    """
    Map raw sequences to canonical token lists.

    Args:
        data: Sequences of labels (inputs are never modified)
        na_syms: Extra tokens treated as missing. ``None`` means ``["*", "%"]``

    Returns:
        New list of token lists with every missing token replaced by SENTINEL
    """
    na_set = {"*", "%"} if na_syms is None else set(na_syms)
    return [
        [SENTINEL if is_missing(tok) or tok in na_set else tok for tok in row]
        for row in data
    ]


def effective_length(tokens: Sequence[Token]) -> int:
    """Position just past the last non-sentinel token (0 if there is none)."""
    for i in range(len(tokens) - 1, -1, -1):
        if tokens[i] is not SENTINEL:
            return i + 1
    return 0


@dataclass
class PreparedSequences:
    """
    Sequence data plus derived vocabulary and summary statistics.

    Only ``sequence_data`` is used for clustering; ``labels`` and
    ``statistics`` describe the dataset for callers.
    """

    sequence_data: SequenceData
    labels: List[str]
    statistics: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.sequence_data)


def prepare_data(
    data: Iterable[Sequence[Optional[Token]]],
    begin_state: Optional[str] = None,
    end_state: Optional[str] = None,
) -> PreparedSequences:
    """
    Build a PreparedSequences container from wide-format sequences.

    The vocabulary is the sorted set of non-missing labels. When given,
    ``begin_state`` is prepended to every sequence and listed first in the
    vocabulary; ``end_state`` is appended and listed last.

    Args:
        data: Sequences of labels, one per session
        begin_state: Optional state inserted at the start of each sequence
        end_state: Optional state added at the end of each sequence

    Returns:
        PreparedSequences with ``sequence_data``, ``labels`` and
        ``statistics`` (n_sessions, n_unique_actions, unique_actions,
        max_sequence_length, mean_sequence_length)
    """
    rows = [list(row) for row in data]

    labels = sorted({str(tok) for row in rows for tok in row if not is_missing(tok)})
    if begin_state and begin_state not in labels:
        labels.insert(0, begin_state)
    if end_state and end_state not in labels:
        labels.append(end_state)

    if begin_state:
        rows = [[begin_state] + row for row in rows]
    if end_state:
        rows = [row + [end_state] for row in rows]

    total_length = 0
    max_len = 0
    for row in rows:
        row_len = sum(1 for tok in row if not is_missing(tok))
        total_length += row_len
        max_len = max(max_len, row_len)

    statistics = {
        "n_sessions": len(rows),
        "n_unique_actions": len(labels),
        "unique_actions": list(labels),
        "max_sequence_length": max_len,
        "mean_sequence_length": total_length / len(rows) if rows else 0.0,
    }
    return PreparedSequences(sequence_data=rows, labels=labels, statistics=statistics)
