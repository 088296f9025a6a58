# dtm/Smart.py
"""
SMART weighting schemes over a document-term matrix.

A scheme is three letters <tf><df><norm>, e.g. "ltc" or "nnn".
The functions below work on the nonzero entries only, as numpy arrays
aligned with the CSR data of the count matrix.
"""
import logging
from typing import Callable, Dict, Hashable, Optional, Tuple

import numpy as np
from scipy.sparse import csr_matrix

from dtm.Config import DEFAULT_SETTINGS
from dtm.Errors import InvalidInput
from dtm.Matrix import DocumentTermMatrix, densify

logger = logging.getLogger(__name__)

LOG = np.log10


# ---------- TF ----------
def tf_n(tf, **_):
    return tf.astype(np.float64)


def tf_l(tf, **_):
    return 1.0 + LOG(tf)


def tf_a(tf, var=None, **_):
    # var is max tf of the entry's document
    return 0.5 + 0.5 * tf / var


def tf_b(tf, **_):
    return np.where(tf > 0, 1.0, 0.0)


def tf_L(tf, var=None, **_):
    # var is average tf of the entry's document
    return (1.0 + LOG(tf)) / (1.0 + LOG(var))


TF_FUNCS: Dict[str, Callable] = {
    "n": tf_n,
    "l": tf_l,
    "a": tf_a,
    "b": tf_b,
    "L": tf_L,
}


# ---------- DF ----------
def df_n(df, N=None, **_):
    return np.ones(len(df), dtype=np.float64)


def df_t(df, N, **_):
    return LOG(N / df)


def df_p(df, N, **_):
    # Terms in more than half the documents get 0
    with np.errstate(divide="ignore"):
        return np.maximum(0.0, LOG((N - df) / df))


DF_FUNCS: Dict[str, Callable] = {"n": df_n, "t": df_t, "p": df_p}


# ---------- Normalization ----------
def norm_n(weights, rows, n_rows, **_):
    return np.ones(n_rows, dtype=np.float64)


def norm_c(weights, rows, n_rows, **_):
    sq = np.bincount(rows, weights=weights * weights, minlength=n_rows)
    norms = np.sqrt(sq)
    out = np.ones(n_rows, dtype=np.float64)
    nonzero = norms > 0
    out[nonzero] = 1.0 / norms[nonzero]
    return out


NORM_FUNCS: Dict[str, Callable] = {"n": norm_n, "c": norm_c}


def parse_scheme(scheme: str) -> Tuple[Callable, Callable, Callable]:
    if len(scheme) != 3:
        raise InvalidInput(f"SMART scheme must have three letters, got {scheme!r}.")
    tf, df, norm = scheme
    if tf not in TF_FUNCS or df not in DF_FUNCS or norm not in NORM_FUNCS:
        raise InvalidInput(
            f"Unknown SMART scheme {scheme!r}: tf in {sorted(TF_FUNCS)}, "
            f"df in {sorted(DF_FUNCS)}, norm in {sorted(NORM_FUNCS)}."
        )
    return TF_FUNCS[tf], DF_FUNCS[df], NORM_FUNCS[norm]


class WeightedMatrix:
    """
    Float weights on the same cells as the count matrix they came from.
    A weight can be 0.0 (e.g. a term present in every document under "t")
    without the cell being dropped.
    """

    def __init__(self, documents, terms, values: csr_matrix, scheme: str):
        self.documents: Tuple[Hashable, ...] = tuple(documents)
        self.terms: Tuple[str, ...] = tuple(terms)
        self.scheme = scheme
        self._values = values
        self._doc_index = {d: i for i, d in enumerate(self.documents)}
        self._term_index = {t: j for j, t in enumerate(self.terms)}

    @property
    def shape(self) -> Tuple[int, int]:
        return self._values.shape

    def get(self, doc_id: Hashable, term: str) -> float:
        i = self._doc_index.get(doc_id)
        j = self._term_index.get(term)
        if i is None or j is None:
            return 0.0
        return float(self._values[i, j])

    def row(self, doc_id: Hashable) -> Dict[str, float]:
        i = self._doc_index.get(doc_id)
        if i is None:
            return {}
        start, end = self._values.indptr[i], self._values.indptr[i + 1]
        return {
            self.terms[j]: float(w)
            for j, w in zip(self._values.indices[start:end], self._values.data[start:end])
        }

    def to_dense(self, limit: Optional[int] = None) -> np.ndarray:
        return densify(self._values, limit)


def weight(matrix: DocumentTermMatrix, scheme: Optional[str] = None) -> WeightedMatrix:
    """
    Apply a SMART scheme (Settings.weighting_scheme by default) to a count
    matrix.
    """
    scheme = scheme or DEFAULT_SETTINGS.weighting_scheme
    tf_func, df_func, norm_func = parse_scheme(scheme)

    counts = matrix.sparse()
    n_rows, n_cols = counts.shape
    if counts.nnz == 0:
        return WeightedMatrix(matrix.documents, matrix.terms,
                              csr_matrix((n_rows, n_cols), dtype=np.float64), scheme)

    tf = counts.data
    # Row index of every stored entry
    rows = np.repeat(np.arange(n_rows), np.diff(counts.indptr))
    unique = np.diff(counts.indptr)
    row_sum = np.bincount(rows, weights=tf, minlength=n_rows)

    if tf_func is tf_a:
        var = counts.max(axis=1).toarray().ravel()[rows]
    elif tf_func is tf_L:
        var = (row_sum / unique)[rows]
    else:
        var = None

    df = np.bincount(counts.indices, minlength=n_cols)
    idf = df_func(df, N=n_rows)

    weights = tf_func(tf, var=var) * idf[counts.indices]
    weights = weights * norm_func(weights, rows, n_rows)[rows]

    values = csr_matrix(
        (weights, counts.indices.copy(), counts.indptr.copy()), shape=counts.shape
    )
    logger.debug("Weighted %s with scheme %s", matrix, scheme)
    return WeightedMatrix(matrix.documents, matrix.terms, values, scheme)
