# dtm/Storage.py
"""
Reading and writing document-term matrices.

Two formats:
 - triples: plain text, one "document<TAB>term<TAB>count" line per entry
 - binary: msgpack records streamed through zstandard. The first record is
   a header with the format version, documents and terms; each following
   record is one row: (row, [term ids], [counts]). Document id types
   (int or str) are preserved.
"""
import logging
from typing import Callable, Hashable, Iterator, List, Optional, Tuple

import msgpack
import numpy as np
import zstandard as zstd
from scipy.sparse import csr_matrix

from dtm.Config import DEFAULT_SETTINGS
from dtm.Errors import InvalidInput
from dtm.Matrix import (
    COUNT_DTYPE, DocumentTermMatrix, _check_count, _check_document, _check_term
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


# ---------------------------------------------------------
# TRIPLES
# ---------------------------------------------------------
# Field and line separators; \r also ends a line when read back in text mode
_LINE_BREAKS = ("\t", "\n", "\r")


def write_triples(matrix: DocumentTermMatrix, path: str) -> int:
    """
    Write one line per entry. Returns the number of lines written.
    """
    written = 0
    with open(path, "w", encoding="utf8") as f:
        for doc_id, term, count in matrix.entries():
            doc = str(doc_id)
            if any(c in doc or c in term for c in _LINE_BREAKS):
                raise InvalidInput(
                    f"Cannot write ({doc_id!r}, {term!r}) as a triple: "
                    "tab or line break in value."
                )
            f.write(f"{doc}\t{term}\t{count}\n")
            written += 1
    logger.debug("Wrote %d triples to %s", written, path)
    return written


def _parse_triples(path: str, document_type: Callable[[str], Hashable]) -> Iterator[Tuple[Hashable, str, int]]:
    with open(path, "r", encoding="utf8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            parts = line.split("\t")
            if len(parts) != 3:
                raise InvalidInput(
                    f"{path}:{lineno}: expected 3 tab separated fields, got {len(parts)}."
                )
            doc, term, count = parts
            try:
                doc_id = _check_document(document_type(doc))
                _check_term(term)
                # Plain ascii digits only, int() also takes "1_000" and " 3 "
                if not (count.isascii() and count.isdigit()):
                    raise InvalidInput(f"Count must be a positive integer, got {count!r}.")
                n = _check_count(int(count))
            except ValueError as e:
                raise InvalidInput(f"{path}:{lineno}: {e}") from e
            yield doc_id, term, n


def read_triples(path: str, document_type: Callable[[str], Hashable] = str) -> DocumentTermMatrix:
    """
    Read a triples file. Repeated (document, term) pairs are summed.
    `document_type` converts the document column, e.g. int.
    """
    matrix = DocumentTermMatrix.from_entries(_parse_triples(path, document_type))
    logger.debug("Read %s from %s", matrix, path)
    return matrix


# ---------------------------------------------------------
# BINARY
# ---------------------------------------------------------
def save(matrix: DocumentTermMatrix, path: str, level: Optional[int] = None) -> None:
    """
    Encode header and rows with msgpack and compress with zstandard.
    Row by row writing allows row by row reading.
    """
    if level is None:
        level = DEFAULT_SETTINGS.compression_level
    header = {
        "version": FORMAT_VERSION,
        "documents": list(matrix.documents),
        "terms": list(matrix.terms),
    }
    with open(path, "wb") as f, zstd.ZstdCompressor(level=level).stream_writer(f) as zf:
        pack = msgpack.Packer().pack
        zf.write(pack(header))
        for i, cols, counts in matrix._row_arrays():
            zf.write(pack((i, cols.tolist(), counts.tolist())))
    logger.debug("Saved %s to %s", matrix, path)


def _read_records(path: str):
    """
    Generator over the msgpack records of a file written by save().
    """
    with open(path, "rb") as f, zstd.ZstdDecompressor().stream_reader(f) as zf:
        unpacker = msgpack.Unpacker(zf)
        for record in unpacker:
            yield record


def _check_header(path: str, header) -> Tuple[list, list]:
    if not isinstance(header, dict) or header.get("version") != FORMAT_VERSION:
        raise InvalidInput(f"{path}: not a matrix file of version {FORMAT_VERSION}.")
    documents = header.get("documents")
    terms = header.get("terms")
    if not isinstance(documents, list) or not isinstance(terms, list):
        raise InvalidInput(f"{path}: header must list documents and terms.")
    try:
        documents = [_check_document(d) for d in documents]
        for term in terms:
            _check_term(term)
    except InvalidInput as e:
        raise InvalidInput(f"{path}: {e}") from e
    if len(set(documents)) != len(documents):
        raise InvalidInput(f"{path}: duplicate document ids in header.")
    if len(set(terms)) != len(terms):
        raise InvalidInput(f"{path}: duplicate terms in header.")
    return documents, terms


def load(path: str) -> DocumentTermMatrix:
    """
    Read a file written by save(). Every record is checked, so a damaged
    or hand-made file raises InvalidInput instead of producing empty rows,
    unused terms or non-positive counts.
    """
    records = _read_records(path)
    documents, terms = _check_header(path, next(records, None))
    n_terms = len(terms)
    indptr: List[int] = [0]
    indices: List[int] = []
    data: List[int] = []

    # Rows are written in order, one record each
    for expected, record in enumerate(records):
        if not isinstance(record, list) or len(record) != 3:
            raise InvalidInput(f"{path}: corrupt row record {expected}.")
        i, cols, counts = record
        if i != expected or not isinstance(cols, list) or not isinstance(counts, list) \
                or len(cols) != len(counts):
            raise InvalidInput(f"{path}: corrupt row record {expected}.")
        if not cols:
            raise InvalidInput(f"{path}: row {expected} has no entries.")
        for j in cols:
            if isinstance(j, bool) or not isinstance(j, int) or not 0 <= j < n_terms:
                raise InvalidInput(f"{path}: row {expected} has term index {j!r} out of range.")
        if len(set(cols)) != len(cols):
            raise InvalidInput(f"{path}: row {expected} repeats a term index.")
        try:
            data.extend(_check_count(c) for c in counts)
        except InvalidInput as e:
            raise InvalidInput(f"{path}: row {expected}: {e}") from e
        indices.extend(cols)
        indptr.append(len(indices))

    if len(indptr) != len(documents) + 1:
        raise InvalidInput(
            f"{path}: expected {len(documents)} rows, found {len(indptr) - 1}."
        )
    if len(set(indices)) != n_terms:
        raise InvalidInput(f"{path}: header lists terms without entries.")

    counts = csr_matrix(
        (
            np.asarray(data, dtype=COUNT_DTYPE),
            np.asarray(indices, dtype=np.int64),
            np.asarray(indptr, dtype=np.int64),
        ),
        shape=(len(documents), n_terms),
    )
    matrix = DocumentTermMatrix(documents, terms, counts)
    logger.debug("Loaded %s from %s", matrix, path)
    return matrix
