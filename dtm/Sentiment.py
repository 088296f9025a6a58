# dtm/Sentiment.py
"""
Lexicon based sentiment scoring on top of a document-term matrix.

Counts positive and negative lexicon words per document and derives:
 - net = positive - negative
 - proportion = (positive + negative) / total words
 - ratio = (positive - negative) / (positive + negative)

A document with no sentiment-bearing words has no defined ratio. What to
report instead is a policy ("zero", "nan" or "raise"), taken from
Settings.undefined_ratio unless given.
"""
import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, FrozenSet, Hashable, Optional

import pandas as pd

from dtm.Config import DEFAULT_SETTINGS, RATIO_POLICIES
from dtm.Errors import InvalidInput, UndefinedRatio
from dtm.Matrix import DocumentTermMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentimentLexicon:
    positive: FrozenSet[str]
    negative: FrozenSet[str]

    def __post_init__(self):
        # Accept any iterable of words
        object.__setattr__(self, "positive", frozenset(self.positive))
        object.__setattr__(self, "negative", frozenset(self.negative))

    @classmethod
    def from_csv(cls, path_or_buffer, word_column: str = "word",
                 label_column: str = "sentiment") -> "SentimentLexicon":
        """
        Read a two column table such as the Bing lexicon (word,sentiment).
        Rows labelled other than positive/negative are ignored.
        """
        df = pd.read_csv(path_or_buffer, dtype=str, keep_default_na=False)
        missing = {word_column, label_column} - set(df.columns)
        if missing:
            raise InvalidInput(f"Lexicon table is missing columns {sorted(missing)}.")

        words = df[word_column].str.strip().str.lower()
        labels = df[label_column].str.strip().str.lower()
        positive = words[labels == "positive"]
        negative = words[labels == "negative"]
        skipped = len(df) - len(positive) - len(negative)
        if skipped:
            logger.debug("Skipped %d lexicon rows with other labels", skipped)
        return cls(positive[positive != ""], negative[negative != ""])


@dataclass(frozen=True)
class SentimentScore:
    document: Hashable
    positive: int
    negative: int
    total: int
    net: int
    proportion: float
    ratio: float


def sentiment_ratio(positive: int, negative: int, policy: Optional[str] = None) -> float:
    """
    (positive - negative) / (positive + negative), with the zero
    denominator resolved by `policy`.
    """
    policy = policy or DEFAULT_SETTINGS.undefined_ratio
    if policy not in RATIO_POLICIES:
        raise InvalidInput(f"Unknown ratio policy {policy!r}.")
    denom = positive + negative
    if denom > 0:
        return (positive - negative) / denom
    if policy == "zero":
        return 0.0
    if policy == "nan":
        return math.nan
    raise UndefinedRatio("No sentiment-bearing words, ratio is undefined.")


def score(matrix: DocumentTermMatrix, lexicon: SentimentLexicon,
          policy: Optional[str] = None) -> Dict[Hashable, SentimentScore]:
    """
    SentimentScore for every document of the matrix.
    """
    totals = matrix.row_sums()
    positive = matrix.filter(term_predicate=lexicon.positive.__contains__).row_sums()
    negative = matrix.filter(term_predicate=lexicon.negative.__contains__).row_sums()

    scores = {}
    for doc_id, total in totals.items():
        pos = positive.get(doc_id, 0)
        neg = negative.get(doc_id, 0)
        try:
            ratio = sentiment_ratio(pos, neg, policy)
        except UndefinedRatio as e:
            raise UndefinedRatio(f"Document {doc_id!r}: {e}") from e
        scores[doc_id] = SentimentScore(
            document=doc_id,
            positive=pos,
            negative=neg,
            total=total,
            net=pos - neg,
            proportion=(pos + neg) / total,
            ratio=ratio,
        )
    return scores


def scores_frame(scores: Dict[Hashable, SentimentScore]) -> pd.DataFrame:
    columns = ["document", "positive", "negative", "total", "net", "proportion", "ratio"]
    frame = pd.DataFrame([asdict(s) for s in scores.values()], columns=columns)
    return frame.set_index("document")
