# ======================================================
# tests/test_sentiment.py
# ======================================================
# Here, we are testing lexicon sentiment scoring:
#   - positive / negative counts and derived ratios per document
#   - the policy for documents without sentiment words
#   - reading a word,sentiment lexicon table
# ======================================================

import io
import math
import unittest

from dtm.Errors import InvalidInput, UndefinedRatio
from dtm.Matrix import DocumentTermMatrix
from dtm.Sentiment import SentimentLexicon, score, scores_frame, sentiment_ratio


class TestScore(unittest.TestCase):

    def setUp(self):
        tokens = [
            ("d1", "happy"), ("d1", "happy"), ("d1", "sad"), ("d1", "bird"),
            ("d2", "bird"), ("d2", "eats"),
            ("d3", "terrible"),
        ]
        self.matrix = DocumentTermMatrix.build(tokens)
        self.lexicon = SentimentLexicon(positive=["happy", "good"], negative={"sad", "terrible"})

    def test_counts(self):
        scores = score(self.matrix, self.lexicon, policy="zero")
        d1 = scores["d1"]
        self.assertEqual((d1.positive, d1.negative, d1.total, d1.net), (2, 1, 4, 1))
        self.assertAlmostEqual(d1.proportion, 0.75)
        self.assertAlmostEqual(d1.ratio, 1 / 3)
        self.assertAlmostEqual(scores["d3"].ratio, -1.0)

    def test_zero_policy(self):
        # here, we are checking a document without lexicon words reports 0 under "zero"
        self.assertEqual(score(self.matrix, self.lexicon, policy="zero")["d2"].ratio, 0.0)

    def test_nan_policy(self):
        self.assertTrue(math.isnan(score(self.matrix, self.lexicon, policy="nan")["d2"].ratio))

    def test_default_policy_is_nan(self):
        self.assertTrue(math.isnan(score(self.matrix, self.lexicon)["d2"].ratio))

    def test_raise_policy(self):
        with self.assertRaises(UndefinedRatio):
            score(self.matrix, self.lexicon, policy="raise")

    def test_unknown_policy(self):
        with self.assertRaises(InvalidInput):
            sentiment_ratio(0, 0, policy="neutral")

    def test_frame(self):
        frame = scores_frame(score(self.matrix, self.lexicon, policy="zero"))
        self.assertEqual(set(frame.index), {"d1", "d2", "d3"})
        self.assertEqual(frame.loc["d1", "positive"], 2)

    def test_empty_matrix(self):
        self.assertEqual(score(DocumentTermMatrix.empty(), self.lexicon), {})


class TestLexiconTable(unittest.TestCase):

    def test_from_csv(self):
        table = io.StringIO(
            "word,sentiment\n"
            "Happy,positive\n"
            "sad,negative\n"
            "maybe,uncertain\n"
            "good, Positive\n"
        )
        lexicon = SentimentLexicon.from_csv(table)
        self.assertEqual(lexicon.positive, frozenset({"happy", "good"}))
        self.assertEqual(lexicon.negative, frozenset({"sad"}))

    def test_missing_columns(self):
        with self.assertRaises(InvalidInput):
            SentimentLexicon.from_csv(io.StringIO("term,label\nhappy,positive\n"))


if __name__ == "__main__":
    unittest.main()
