# dtm/tokenizer.py
"""
Tokenizer module.

Using nltk, strings are tokenized and optionally stemmed, producing the
(document, term) stream that DocumentTermMatrix.build() consumes.

This module also preprocesses the input by removing URLs and HTML.
"""

import logging
import os
import re
from typing import Hashable, Iterable, Iterator, List, Optional, Tuple

import nltk
from nltk.corpus import stopwords
from nltk.stem.porter import PorterStemmer

logger = logging.getLogger(__name__)


class Tokenizer:
    """
    The Tokenizer class.

    Responsibilities:
      - Normalize and tokenize text.
      - Optionally stem words (reduce to root form).
      - Exclude short tokens, stopwords and, if asked, numbers.
      - Remove URLs and HTML

    Parameters:
        custom_stopwords : Optional[Iterable[str]]
            Stopwords to drop. When None, the nltk English list is used and
            downloaded into `nltk_dir` if `nltk_download` is set.
        use_stemmer : bool
            Whether to apply stemming using Porter Stemmer.
        drop_numbers : bool
            Whether to skip all-digit tokens.
        min_length : int
            Tokens shorter than this are skipped.
    """
    def __init__(self, custom_stopwords: Optional[Iterable[str]] = None, use_stemmer: bool = False,
                 drop_numbers: bool = True, min_length: int = 2,
                 nltk_dir: str = "nltk_data", nltk_download: bool = True):

        if custom_stopwords is not None:
            self.stopwords = set(custom_stopwords)
        else:
            if nltk_download:
                os.makedirs(nltk_dir, exist_ok=True)
                if nltk_dir not in nltk.data.path:
                    nltk.data.path.append(nltk_dir)
                nltk.download("stopwords", download_dir=nltk_dir, quiet=True)
            self.stopwords = set(stopwords.words("english"))
            logger.debug("Loaded %d nltk stopwords", len(self.stopwords))

        self.drop_numbers = drop_numbers
        self.min_length = min_length

        # Tokens consist of letters, digits and inner hyphens
        self._token_re = re.compile(r"[^\W_]+(?:-[^\W_]+)*", flags=re.UNICODE)

        # Detect URLs
        self._url_re = re.compile(r"""(?xi)
            \b(
                (?:https?://|ftp://|file://|mailto:|www\.)
                [^\s<>'"]+
            )
        """)

        # Detect HTML
        self._html_re = re.compile(r"<[^>]+>")

        self.use_stemmer = use_stemmer
        self.stemmer = PorterStemmer() if use_stemmer else None

    def tokenize(self, text: Optional[str]) -> List[str]:
        """
        Tokenize an input string into normalized tokens.

          1. Convert text to lowercase
          2. Remove HTML tags and URLs
          3. Split on the token pattern
          4. Filter out short tokens, numbers (optional) and stopwords
          5. Apply stemming if requested
        """
        if text is None:
            return []

        text = text.lower()
        text = self._html_re.sub(" ", text)
        text = self._url_re.sub(" ", text)

        tokens = []
        for token in self._token_re.findall(text):
            if len(token) < self.min_length:
                continue

            if self.drop_numbers and token.isdigit():
                continue

            if token in self.stopwords:
                continue

            if self.stemmer is not None:
                token = self.stemmer.stem(token)

            tokens.append(token)

        return tokens

    def pairs(self, documents: Iterable[Tuple[Hashable, Optional[str]]]) -> Iterator[Tuple[Hashable, str]]:
        """
        (document id, text) -> stream of (document id, term).
        """
        for doc_id, text in documents:
            for token in self.tokenize(text):
                yield doc_id, token
