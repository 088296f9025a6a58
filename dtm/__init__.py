"""Sparse document-term matrices with corpus term statistics."""

from dtm.Errors import InvalidInput, SizeLimitWarning, UndefinedRatio
from dtm.Config import Settings, DEFAULT_SETTINGS, load_settings
from dtm.Matrix import DocumentTermMatrix
from dtm.Statistics import TermStats, statistics_frame, top_terms

__all__ = [
    "InvalidInput",
    "SizeLimitWarning",
    "UndefinedRatio",
    "Settings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "DocumentTermMatrix",
    "TermStats",
    "statistics_frame",
    "top_terms",
]
