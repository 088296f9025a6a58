# ======================================================
# tests/test_tokenizer.py
# ======================================================
# Here, we are testing the Tokenizer component to ensure:
#   - it correctly lowercases text
#   - removes stopwords, digits, HTML and URLs
#   - supports optional stemming
#   - produces the (document, term) stream for the matrix
# Stopwords are passed explicitly so no nltk download is needed.
# ======================================================

import unittest

from dtm.Matrix import DocumentTermMatrix
from dtm.tokenizer import Tokenizer

STOPWORDS = {"the", "is", "on", "a", "has"}


class TestTokenizer(unittest.TestCase):

    def setUp(self):
        self.tokenizer = Tokenizer(custom_stopwords=STOPWORDS)

    def test_basic_tokenization(self):
        tokens = self.tokenizer.tokenize("Artificial Intelligence is amazing!")
        self.assertEqual(tokens, ["artificial", "intelligence", "amazing"])

    def test_stopword_removal(self):
        tokens = self.tokenizer.tokenize("The cat sat on the mat.")
        self.assertNotIn("the", tokens)
        self.assertIn("cat", tokens)
        self.assertIn("mat", tokens)

    def test_number_removal(self):
        tokens = self.tokenizer.tokenize("AI has 1234 models")
        self.assertNotIn("1234", tokens)
        self.assertIn("ai", tokens)

    def test_numbers_kept(self):
        tokens = Tokenizer(custom_stopwords=STOPWORDS, drop_numbers=False).tokenize("AI has 1234 models")
        self.assertIn("1234", tokens)

    def test_html_and_urls(self):
        tokens = self.tokenizer.tokenize("<b>bold</b> see https://example.com/page and www.test.org")
        self.assertEqual(tokens, ["bold", "see", "and"])

    def test_hyphenated(self):
        self.assertIn("store-front", self.tokenizer.tokenize("the store-front"))

    def test_none(self):
        self.assertEqual(self.tokenizer.tokenize(None), [])

    def test_stemming(self):
        stem_tokenizer = Tokenizer(custom_stopwords=STOPWORDS, use_stemmer=True)
        tokens = stem_tokenizer.tokenize("running runs runner")
        self.assertTrue(all(t.startswith("run") for t in tokens))

    def test_pairs_build_matrix(self):
        # here, we are feeding the token stream straight into the matrix
        docs = [("d1", "Bird bird eats"), ("d2", "the bird")]
        matrix = DocumentTermMatrix.build(self.tokenizer.pairs(docs))
        self.assertEqual(matrix.column_sums(), {"bird": 3, "eats": 1})
        self.assertEqual(matrix.row_sums(), {"d1": 3, "d2": 1})


if __name__ == "__main__":
    unittest.main()
