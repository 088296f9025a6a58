# dtm/Matrix.py
"""
Sparse document-term matrix.

A DocumentTermMatrix maps (document, term) -> count and stores only the
nonzero cells. It supports:
 - building from a (document, term) token stream or (document, term, count) triples
 - row sums (tokens per document) and column sums (term frequency)
 - per-term statistics (see dtm.Statistics)
 - filtering into a new, smaller matrix
 - dense materialization for small matrices

Rows and columns are exactly the documents and terms with at least one
nonzero entry. A matrix is never modified after construction.
"""
import logging
import warnings
from typing import (
    Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple
)

import marisa_trie
import numpy as np
from scipy.sparse import csr_matrix

from dtm import Statistics
from dtm.Config import DEFAULT_SETTINGS
from dtm.Errors import InvalidInput, SizeLimitWarning
from dtm.Lexicon import Lexicon

logger = logging.getLogger(__name__)

COUNT_DTYPE = np.int64

Entry = Tuple[Hashable, str, int]


def _check_document(doc_id: Any) -> Hashable:
    if doc_id is None:
        raise InvalidInput("Document id is None.")
    if isinstance(doc_id, str) and not doc_id.strip():
        raise InvalidInput("Document id is empty.")
    if isinstance(doc_id, np.integer):
        # numpy ids from pandas columns
        return int(doc_id)
    if not isinstance(doc_id, (str, int)) or isinstance(doc_id, bool):
        raise InvalidInput(
            f"Document id must be a string or an integer, got {doc_id!r}."
        )
    return doc_id


def _check_term(term: Any) -> None:
    if term is None:
        raise InvalidInput("Term is None.")
    if not isinstance(term, str):
        raise InvalidInput(f"Term must be a string, got {term!r}.")
    if not term.strip():
        raise InvalidInput("Term is empty.")


def _check_count(count: Any) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidInput(f"Count must be an integer, got {count!r}.")
    if count <= 0:
        raise InvalidInput(f"Count must be positive, got {count}.")
    return int(count)


def densify(values: csr_matrix, limit: Optional[int] = None) -> np.ndarray:
    """
    Materialize a sparse matrix as a dense array.

    Memory is O(rows x columns). A SizeLimitWarning is issued when the
    cell count exceeds `limit`, and the array is built anyway.
    """
    if limit is None:
        limit = DEFAULT_SETTINGS.dense_size_limit
    rows, cols = values.shape
    cells = rows * cols
    if cells > limit:
        message = (
            f"Dense matrix of {rows} x {cols} = {cells} cells exceeds "
            f"the limit of {limit}."
        )
        logger.warning(message)
        warnings.warn(message, SizeLimitWarning, stacklevel=3)
    return values.toarray()


class DocumentTermMatrix:
    def __init__(self, documents: Iterable[Hashable], terms: Iterable[str], counts: csr_matrix):
        """
        Wrap an already validated count matrix. Use build() or
        from_entries() instead of calling this directly.
        """
        self._documents: Tuple[Hashable, ...] = tuple(documents)
        self._terms: Tuple[str, ...] = tuple(terms)

        # Canonical CSR: sorted indices, no duplicates, no explicit zeros
        csr = csr_matrix(counts, dtype=COUNT_DTYPE, copy=True)
        csr.sum_duplicates()
        csr.eliminate_zeros()
        if csr.shape != (len(self._documents), len(self._terms)):
            raise InvalidInput(
                f"Count matrix shape {csr.shape} does not match "
                f"{len(self._documents)} documents x {len(self._terms)} terms."
            )
        self._csr = csr
        # Column-major copy for per-term lookups
        self._csc = csr.tocsc()

        self._doc_index: Dict[Hashable, int] = {
            d: i for i, d in enumerate(self._documents)
        }
        self._term_index: Dict[str, int] = {
            t: j for j, t in enumerate(self._terms)
        }
        self._trie: Optional[marisa_trie.Trie] = None

    # ---------------------------------------------------------
    # CONSTRUCTION
    # ---------------------------------------------------------
    @classmethod
    def build(cls, tokens: Iterable[Tuple[Hashable, str]]) -> "DocumentTermMatrix":
        """
        Count (document, term) pairs. Repeated pairs add up to one entry.
        """
        return cls.from_entries((doc_id, term, 1) for doc_id, term in tokens)

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> "DocumentTermMatrix":
        """
        Build from (document, term, count) triples. Counts of repeated
        pairs are summed.
        """
        documents = Lexicon()
        terms = Lexicon()
        rows: List[int] = []
        cols: List[int] = []
        data: List[int] = []

        for doc_id, term, count in entries:
            doc_id = _check_document(doc_id)
            _check_term(term)
            data.append(_check_count(count))
            rows.append(documents.get_id(doc_id))
            cols.append(terms.get_id(term))

        counts = csr_matrix(
            (
                np.asarray(data, dtype=COUNT_DTYPE),
                (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
            ),
            shape=(len(documents), len(terms)),
        )
        matrix = cls(documents.keys, terms.keys, counts)
        logger.debug(
            "Built matrix with %d documents, %d terms, %d entries",
            len(documents), len(terms), matrix.nnz,
        )
        return matrix

    @classmethod
    def empty(cls) -> "DocumentTermMatrix":
        return cls((), (), csr_matrix((0, 0), dtype=COUNT_DTYPE))

    # ---------------------------------------------------------
    # SHAPE AND LOOKUPS
    # ---------------------------------------------------------
    @property
    def documents(self) -> Tuple[Hashable, ...]:
        return self._documents

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    @property
    def shape(self) -> Tuple[int, int]:
        return self._csr.shape

    @property
    def nnz(self) -> int:
        return int(self._csr.nnz)

    def __len__(self) -> int:
        return self.nnz

    def __contains__(self, pair) -> bool:
        doc_id, term = pair
        return self.get(doc_id, term) > 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentTermMatrix):
            return NotImplemented
        if set(self._documents) != set(other._documents):
            return False
        if set(self._terms) != set(other._terms):
            return False
        return set(self.entries()) == set(other.entries())

    __hash__ = None

    def __repr__(self) -> str:
        rows, cols = self.shape
        return f"DocumentTermMatrix(documents={rows}, terms={cols}, entries={self.nnz})"

    def get(self, doc_id: Hashable, term: str) -> int:
        """
        Count for one cell, 0 when the document or term is absent.
        """
        i = self._doc_index.get(doc_id)
        j = self._term_index.get(term)
        if i is None or j is None:
            return 0
        start, end = self._csr.indptr[i], self._csr.indptr[i + 1]
        cols = self._csr.indices[start:end]
        k = np.searchsorted(cols, j)
        if k < len(cols) and cols[k] == j:
            return int(self._csr.data[start + k])
        return 0

    def row(self, doc_id: Hashable) -> Dict[str, int]:
        """
        term -> count for one document; empty when absent.
        """
        i = self._doc_index.get(doc_id)
        if i is None:
            return {}
        start, end = self._csr.indptr[i], self._csr.indptr[i + 1]
        return {
            self._terms[j]: int(c)
            for j, c in zip(self._csr.indices[start:end], self._csr.data[start:end])
        }

    def column(self, term: str) -> Dict[Hashable, int]:
        """
        document -> count for one term; empty when absent.
        """
        j = self._term_index.get(term)
        if j is None:
            return {}
        start, end = self._csc.indptr[j], self._csc.indptr[j + 1]
        return {
            self._documents[i]: int(c)
            for i, c in zip(self._csc.indices[start:end], self._csc.data[start:end])
        }

    def entries(self) -> Iterator[Entry]:
        """
        Yields (document, term, count) for every nonzero cell, row by row.
        """
        for i, cols, counts in self._row_arrays():
            doc_id = self._documents[i]
            for j, c in zip(cols, counts):
                yield doc_id, self._terms[j], int(c)

    def iter_prefix(self, prefix: str, limit: Optional[int] = None) -> Iterator[str]:
        """
        Terms of the vocabulary beginning with `prefix`.
        """
        if self._trie is None:
            self._trie = marisa_trie.Trie(self._terms)
        count = 0
        for key in self._trie.iterkeys(prefix):
            if limit is not None and count >= limit:
                break
            yield key
            count += 1

    def sparse(self) -> csr_matrix:
        """
        Copy of the underlying CSR counts, rows in `documents` order and
        columns in `terms` order.
        """
        return self._csr.copy()

    def _row_arrays(self) -> Iterator[Tuple[int, np.ndarray, np.ndarray]]:
        indptr, indices, data = self._csr.indptr, self._csr.indices, self._csr.data
        for i in range(len(self._documents)):
            start, end = indptr[i], indptr[i + 1]
            yield i, indices[start:end], data[start:end]

    def _document_frequencies(self) -> np.ndarray:
        # Entries are nonzero, so stored entries per column is df
        return np.diff(self._csc.indptr)

    def _column_totals(self) -> np.ndarray:
        if not self._terms:
            return np.zeros(0, dtype=COUNT_DTYPE)
        return np.asarray(self._csc.sum(axis=0)).ravel()

    def _row_totals(self) -> np.ndarray:
        if not self._documents:
            return np.zeros(0, dtype=COUNT_DTYPE)
        return np.asarray(self._csr.sum(axis=1)).ravel()

    # ---------------------------------------------------------
    # AGGREGATES
    # ---------------------------------------------------------
    def column_sums(self) -> Dict[str, int]:
        """
        term -> total count over all documents.
        """
        return {t: int(v) for t, v in zip(self._terms, self._column_totals())}

    def row_sums(self) -> Dict[Hashable, int]:
        """
        document -> total count over all terms.
        """
        return {d: int(v) for d, v in zip(self._documents, self._row_totals())}

    def term_statistics(self) -> List["Statistics.TermStats"]:
        """
        One TermStats record per term, in column order.
        """
        return Statistics.term_statistics(
            self._terms,
            self._column_totals(),
            self._document_frequencies(),
            len(self._documents),
        )

    # ---------------------------------------------------------
    # FILTERING
    # ---------------------------------------------------------
    def filter(
        self,
        term_predicate: Optional[Callable[[str], bool]] = None,
        document_predicate: Optional[Callable[[Hashable], bool]] = None,
    ) -> "DocumentTermMatrix":
        """
        New matrix holding the entries whose term and document both pass.
        A missing predicate accepts everything. Documents and terms left
        without entries are dropped.
        """
        row_mask = np.fromiter(
            (bool(document_predicate(d)) if document_predicate else True for d in self._documents),
            dtype=bool,
            count=len(self._documents),
        )
        col_mask = np.fromiter(
            (bool(term_predicate(t)) if term_predicate else True for t in self._terms),
            dtype=bool,
            count=len(self._terms),
        )
        if not row_mask.any() or not col_mask.any():
            logger.debug("Filter rejected every document or term")
            return self.empty()

        sub = self._csr[row_mask][:, col_mask]
        documents = [d for d, keep in zip(self._documents, row_mask) if keep]
        terms = [t for t, keep in zip(self._terms, col_mask) if keep]

        # Drop rows and columns that lost all their entries
        row_nonempty = np.diff(sub.indptr) > 0
        col_nonempty = np.bincount(sub.indices, minlength=sub.shape[1]) > 0
        if not row_nonempty.any():
            return self.empty()
        sub = sub[row_nonempty][:, col_nonempty]
        documents = [d for d, keep in zip(documents, row_nonempty) if keep]
        terms = [t for t, keep in zip(terms, col_nonempty) if keep]

        matrix = DocumentTermMatrix(documents, terms, sub)
        logger.debug(
            "Filtered %s down to %d documents, %d terms, %d entries",
            self, len(documents), len(terms), matrix.nnz,
        )
        return matrix

    # ---------------------------------------------------------
    # DENSE VIEW
    # ---------------------------------------------------------
    def to_dense(self, limit: Optional[int] = None) -> np.ndarray:
        """
        documents x terms array with explicit zeros.

        Expensive: intended for small matrices and debugging. Warns with
        SizeLimitWarning above `limit` cells (Settings.dense_size_limit by
        default) but never refuses.
        """
        return densify(self._csr, limit)
