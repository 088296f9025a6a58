"""
Exceptions and warnings raised by the document-term store.
"""


class InvalidInput(ValueError):
    """
    Raised when a document id, term, count or stored record is unusable,
    e.g. a None or empty term handed to build.
    """


class SizeLimitWarning(UserWarning):
    """
    Issued when a dense materialization exceeds the configured cell limit.
    The operation still completes.
    """


class UndefinedRatio(ArithmeticError):
    """
    Raised when a sentiment ratio has no sentiment-bearing words and the
    policy asks for it to be reported instead of mapped.
    """
