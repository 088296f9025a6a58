import logging
import os
from typing import Hashable, Iterable, Iterator, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


class DocumentManager:
    """
    Reads raw documents as (document id, text) pairs for the tokenizer.
    """
    def __init__(self, encoding: str = "utf8"):
        self.encoding = encoding

    def read_document(self, filepath: str) -> str:
        with open(filepath, "r", encoding=self.encoding, errors="replace") as f:
            return f.read()

    def read_files(self, filepaths: Iterable[str]) -> Iterator[Tuple[str, str]]:
        """
        One document per file, identified by the file name without extension.
        """
        seen = set()
        for filepath in filepaths:
            if not os.path.isfile(filepath):
                continue
            doc_id = os.path.splitext(os.path.basename(filepath))[0]
            if doc_id in seen:
                # Same stem in two directories
                doc_id = filepath
            seen.add(doc_id)
            yield doc_id, self.read_document(filepath)

    def read_table(self, path_or_buffer, text_column: str,
                   id_column: Optional[str] = None) -> Iterator[Tuple[Hashable, str]]:
        """
        One document per CSV row. Rows with an empty text are skipped.
        Without `id_column` the row number is the document id.
        """
        df = pd.read_csv(path_or_buffer, encoding=self.encoding, low_memory=False)
        if text_column not in df.columns:
            raise KeyError(f"Column {text_column!r} not found in table.")
        if id_column is not None and id_column not in df.columns:
            raise KeyError(f"Column {id_column!r} not found in table.")

        skipped = 0
        for i, row in df.iterrows():
            text = row[text_column]
            if pd.isna(text) or not str(text).strip():
                skipped += 1
                continue
            doc_id = row[id_column] if id_column is not None else i
            if hasattr(doc_id, "item"):
                # numpy scalar -> python int/str
                doc_id = doc_id.item()
            yield doc_id, str(text)
        if skipped:
            logger.debug("Skipped %d rows without text", skipped)
