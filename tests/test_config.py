# ======================================================
# tests/test_config.py
# ======================================================

import json
import os
import tempfile
import unittest

import zstandard as zstd

from dtm.Config import DEFAULT_SETTINGS, SCHEME_LETTERS, Settings, load_settings
from dtm.Errors import InvalidInput
from dtm.Smart import DF_FUNCS, NORM_FUNCS, TF_FUNCS


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(DEFAULT_SETTINGS.dense_size_limit, 10_000_000)
        self.assertEqual(DEFAULT_SETTINGS.undefined_ratio, "nan")
        self.assertEqual(DEFAULT_SETTINGS.weighting_scheme, "ltc")

    def test_overrides(self):
        s = DEFAULT_SETTINGS.with_overrides(undefined_ratio="zero")
        self.assertEqual(s.undefined_ratio, "zero")
        # here, we are making sure the default object was not touched
        self.assertEqual(DEFAULT_SETTINGS.undefined_ratio, "nan")

    def test_invalid(self):
        with self.assertRaises(InvalidInput):
            Settings(undefined_ratio="neutral")
        with self.assertRaises(InvalidInput):
            Settings(dense_size_limit=-1)
        with self.assertRaises(InvalidInput):
            DEFAULT_SETTINGS.with_overrides(colour="blue")

    def test_wrong_types(self):
        # here, we are checking bad override values surface as InvalidInput, not TypeError
        with self.assertRaises(InvalidInput):
            Settings(dense_size_limit="big")
        with self.assertRaises(InvalidInput):
            Settings(dense_size_limit=True)
        with self.assertRaises(InvalidInput):
            Settings(undefined_ratio=0)
        with self.assertRaises(InvalidInput):
            Settings(compression_level="3")
        with self.assertRaises(InvalidInput):
            DEFAULT_SETTINGS.with_overrides(weighting_scheme=None)

    def test_weighting_scheme(self):
        self.assertEqual(Settings(weighting_scheme="Lpc").weighting_scheme, "Lpc")
        for bad in ["xyz", "lt", "ltcc", "ltu"]:
            with self.assertRaises(InvalidInput):
                Settings(weighting_scheme=bad)

    def test_scheme_letters_match_weighting(self):
        self.assertEqual(set(SCHEME_LETTERS[0]), set(TF_FUNCS))
        self.assertEqual(set(SCHEME_LETTERS[1]), set(DF_FUNCS))
        self.assertEqual(set(SCHEME_LETTERS[2]), set(NORM_FUNCS))

    def test_compression_level(self):
        with self.assertRaises(InvalidInput):
            Settings(compression_level=zstd.MAX_COMPRESSION_LEVEL + 1)
        self.assertEqual(Settings(compression_level=1).compression_level, 1)

    def test_load_settings_bad_value(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "settings.json")
            with open(path, "w", encoding="utf8") as f:
                json.dump({"dense_size_limit": "big"}, f)
            with self.assertRaises(InvalidInput):
                load_settings(path)

    def test_load_settings(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "settings.json")
            with open(path, "w", encoding="utf8") as f:
                json.dump({"dense_size_limit": 100, "undefined_ratio": "raise"}, f)
            s = load_settings(path)
        self.assertEqual(s.dense_size_limit, 100)
        self.assertEqual(s.undefined_ratio, "raise")
        self.assertEqual(s.compression_level, DEFAULT_SETTINGS.compression_level)


if __name__ == "__main__":
    unittest.main()
