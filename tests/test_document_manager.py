# ======================================================
# tests/test_document_manager.py
# ======================================================
# Here, we are testing the readers that feed the tokenizer:
#   - one document per text file
#   - one document per CSV row
# ======================================================

import io
import os
import tempfile
import unittest

from dtm.DocumentManager import DocumentManager


class TestDocumentManager(unittest.TestCase):

    def setUp(self):
        self.manager = DocumentManager()

    def test_read_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            paths = []
            for name, text in [("a.txt", "first doc"), ("b.txt", "second doc")]:
                path = os.path.join(tmp, name)
                with open(path, "w", encoding="utf8") as f:
                    f.write(text)
                paths.append(path)
            # here, we are checking directories and missing files are skipped
            paths.append(tmp)
            paths.append(os.path.join(tmp, "missing.txt"))

            docs = list(self.manager.read_files(paths))
        self.assertEqual(docs, [("a", "first doc"), ("b", "second doc")])

    def test_read_table_with_ids(self):
        table = io.StringIO("id,text\n10,hello world\n11,\n12,bye\n")
        docs = list(self.manager.read_table(table, "text", "id"))
        self.assertEqual(docs, [(10, "hello world"), (12, "bye")])

    def test_read_table_row_numbers(self):
        table = io.StringIO("text\nhello\nbye\n")
        docs = list(self.manager.read_table(table, "text"))
        self.assertEqual(docs, [(0, "hello"), (1, "bye")])

    def test_missing_column(self):
        with self.assertRaises(KeyError):
            list(self.manager.read_table(io.StringIO("body\nhello\n"), "text"))


if __name__ == "__main__":
    unittest.main()
