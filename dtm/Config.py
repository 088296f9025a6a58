# dtm/Config.py
"""
Settings shared by the matrix operations.

Defaults live in DEFAULT_SETTINGS. Overrides can be read from a json file
with load_settings(), the same way the index stats are stored.
"""
import json
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

import zstandard as zstd

from dtm.Errors import InvalidInput


# Policies for a sentiment ratio whose denominator is zero
RATIO_POLICIES = ("zero", "nan", "raise")

# Letters allowed at each position of a SMART triple, see dtm.Smart
SCHEME_LETTERS = ("nlabL", "ntp", "nc")


_FIELD_TYPES = {
    "dense_size_limit": int,
    "undefined_ratio": str,
    "weighting_scheme": str,
    "compression_level": int,
}


@dataclass(frozen=True)
class Settings:
    # documents x terms above which to_dense() warns
    dense_size_limit: int = 10_000_000
    # see RATIO_POLICIES
    undefined_ratio: str = "nan"
    # SMART triple used by Smart.weight() when none is given
    weighting_scheme: str = "ltc"
    # zstandard level for Storage.save()
    compression_level: int = 3

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = _FIELD_TYPES[f.name]
            if isinstance(value, bool) or not isinstance(value, expected):
                raise InvalidInput(
                    f"{f.name} must be of type {expected.__name__}, got {value!r}."
                )
        if self.dense_size_limit < 0:
            raise InvalidInput("dense_size_limit must be non-negative.")
        if self.undefined_ratio not in RATIO_POLICIES:
            raise InvalidInput(
                f"undefined_ratio must be one of {RATIO_POLICIES}, "
                f"got {self.undefined_ratio!r}."
            )
        if len(self.weighting_scheme) != 3 or not all(
            letter in allowed for letter, allowed in zip(self.weighting_scheme, SCHEME_LETTERS)
        ):
            raise InvalidInput(f"Unknown SMART scheme {self.weighting_scheme!r}.")
        if self.compression_level > zstd.MAX_COMPRESSION_LEVEL:
            raise InvalidInput(
                f"compression_level must be at most {zstd.MAX_COMPRESSION_LEVEL}, "
                f"got {self.compression_level}."
            )

    def with_overrides(self, **overrides: Any) -> "Settings":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise InvalidInput(f"Unknown settings: {sorted(unknown)}")
        return replace(self, **overrides)


DEFAULT_SETTINGS = Settings()


def load_settings(path: str, base: Settings = DEFAULT_SETTINGS) -> Settings:
    """
    Read a json object of overrides and apply it on top of `base`.
    """
    with open(path, "r", encoding="utf8") as f:
        overrides: Dict[str, Any] = json.load(f)
    if not isinstance(overrides, dict):
        raise InvalidInput(f"{path}: settings file must hold a json object.")
    return base.with_overrides(**overrides)
