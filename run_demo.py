# ======================================================
# run_demo.py
# ======================================================
import glob
import logging
import os

from dtm.DocumentManager import DocumentManager
from dtm.Matrix import DocumentTermMatrix
from dtm.Sentiment import SentimentLexicon, score, scores_frame
from dtm.Smart import weight
from dtm.Statistics import statistics_frame
from dtm.tokenizer import Tokenizer


SAMPLE_DOCS = [
    ("review1", "The bird eats seeds. A happy bird is a good bird."),
    ("review2", "Terrible weather, the bird was sad and the seeds were bad."),
    ("review3", "Seeds cost 12 dollars at the store-front, a great price!"),
    ("review4", "Nothing to report."),
]

STOPWORDS = {"the", "a", "is", "was", "and", "were", "at", "to"}

LEXICON = SentimentLexicon(
    positive={"happy", "good", "great"},
    negative={"terrible", "sad", "bad"},
)


def build_matrix():
    print("=== Building the document-term matrix ===")

    paths = sorted(glob.glob(os.path.join("data", "**", "*.txt"), recursive=True))
    documents = DocumentManager().read_files(paths) if paths else SAMPLE_DOCS

    tokenizer = Tokenizer(custom_stopwords=STOPWORDS, drop_numbers=False)
    matrix = DocumentTermMatrix.build(tokenizer.pairs(documents))

    rows, cols = matrix.shape
    print(f"Indexed {rows} documents.")
    print(f"Vocabulary size: {cols} unique terms, {matrix.nnz} entries.")
    return matrix


def demo_statistics(matrix):
    print("=== Term statistics (top 5 by frequency) ===")
    frame = statistics_frame(matrix.term_statistics())
    print(frame.head(5).to_string())

    print("=== Filtering out numeric and punctuated terms ===")
    stats = {s.term: s for s in matrix.term_statistics()}
    kept = matrix.filter(
        term_predicate=lambda t: not stats[t].is_numeric and not stats[t].has_non_alphanumeric
    )
    print(f"{matrix} -> {kept}")
    return kept


def demo_weights(matrix):
    print("=== ltc weights for the first document ===")
    weighted = weight(matrix, "ltc")
    first = matrix.documents[0]
    for term, w in sorted(weighted.row(first).items(), key=lambda x: -x[1]):
        print(f"{first}\t{term}\t{w:.4f}")


def demo_sentiment(matrix):
    print("=== Sentiment scores (undefined ratio reported as NaN) ===")
    print(scores_frame(score(matrix, LEXICON, policy="nan")).to_string())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    matrix = build_matrix()
    if matrix.nnz:
        kept = demo_statistics(matrix)
        demo_weights(kept)
        demo_sentiment(matrix)
