# dtm/Statistics.py
"""
Per-term corpus statistics.

For each term: total frequency, document frequency, relative document
frequency and a few structural flags used when pruning a vocabulary
(numeric tokens, tokens with punctuation, very short or long tokens).
"""
import re
from dataclasses import asdict, dataclass
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd


# Integers and decimals, optionally signed, with , or . separators
_NUMERIC_RE = re.compile(r"^[+-]?\d+(?:[.,]\d+)*$")


@dataclass(frozen=True)
class TermStats:
    term: str
    frequency: int
    document_frequency: int
    relative_document_frequency: float
    is_numeric: bool
    has_non_alphanumeric: bool
    length: int


def is_numeric(term: str) -> bool:
    return bool(_NUMERIC_RE.match(term))


def has_non_alphanumeric(term: str) -> bool:
    return not term.isalnum()


def term_statistics(
    terms: Sequence[str],
    frequencies: np.ndarray,
    document_frequencies: np.ndarray,
    n_documents: int,
) -> List[TermStats]:
    """
    Combine column totals and document frequencies into TermStats records.
    Called by DocumentTermMatrix.term_statistics().
    """
    out = []
    for term, freq, df in zip(terms, frequencies, document_frequencies):
        rdf = float(df) / n_documents if n_documents > 0 else 0.0
        out.append(
            TermStats(
                term=term,
                frequency=int(freq),
                document_frequency=int(df),
                relative_document_frequency=rdf,
                is_numeric=is_numeric(term),
                has_non_alphanumeric=has_non_alphanumeric(term),
                length=len(term),
            )
        )
    return out


def statistics_frame(stats: Iterable[TermStats], sort_by: str = "frequency") -> pd.DataFrame:
    """
    Table of TermStats indexed by term, sorted descending on `sort_by`
    with the term as tie breaker.
    """
    columns = [
        "term", "frequency", "document_frequency", "relative_document_frequency",
        "is_numeric", "has_non_alphanumeric", "length",
    ]
    frame = pd.DataFrame([asdict(s) for s in stats], columns=columns)
    if sort_by not in columns:
        raise KeyError(f"Unknown column {sort_by!r}")
    if sort_by == "term":
        frame = frame.sort_values("term", kind="mergesort")
    elif not frame.empty:
        frame = frame.sort_values(
            [sort_by, "term"], ascending=[False, True], kind="mergesort"
        )
    return frame.set_index("term")


def top_terms(stats: Iterable[TermStats], n: int = 10) -> List[TermStats]:
    """
    The `n` most frequent terms, ties broken alphabetically.
    """
    return sorted(stats, key=lambda s: (-s.frequency, s.term))[:n]
