# scripts/csv_to_triples.py
# Converts a CSV of texts (one document per row) into a triples file
# (document<TAB>term<TAB>count) that dtm.Storage.read_triples() can load.

import argparse
import logging

from dtm.DocumentManager import DocumentManager
from dtm.Matrix import DocumentTermMatrix
from dtm.Storage import write_triples
from dtm.tokenizer import Tokenizer


def main():
    parser = argparse.ArgumentParser(description="Convert a CSV of texts into a triples file.")
    parser.add_argument("csv")
    parser.add_argument("out")
    parser.add_argument("--text-column", default="text")
    parser.add_argument("--id-column", default=None)
    parser.add_argument("--stem", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    print(f"=== Loading {args.csv} ===")
    rows = DocumentManager().read_table(args.csv, args.text_column, args.id_column)
    tokenizer = Tokenizer(use_stemmer=args.stem)
    matrix = DocumentTermMatrix.build(tokenizer.pairs(rows))

    n = write_triples(matrix, args.out)
    print(f"Wrote {n} triples for {matrix.shape[0]} documents to {args.out}")


if __name__ == "__main__":
    main()
