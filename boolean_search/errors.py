"""
Exceptions raised by the index and query layers.

An absent term is not an error: lookups return an empty list for it.
"""


class BooleanSearchError(Exception):
    """Base class for all errors raised by this package."""


class InvalidWildcardPattern(BooleanSearchError, ValueError):
    """
    Query has more than two wildcards, or two wildcards that are not
    at both the very start and the very end of the term.
    """

    def __init__(self, term: str, reason: str) -> None:
        super().__init__(f"Unsupported wildcard query {term!r}: {reason}")
        self.term = term
        self.reason = reason


class InvalidTermError(BooleanSearchError, ValueError):
    """Term contains a character reserved by the permuterm index."""

    def __init__(self, term: str, reserved: str) -> None:
        super().__init__(f"Term {term!r} contains reserved character {reserved!r}")
        self.term = term
        self.reserved = reserved


class DocumentNotFound(BooleanSearchError, LookupError):
    """No ingested document has the requested id."""

    def __init__(self, doc_id: int) -> None:
        super().__init__(f"Document {doc_id} not found")
        self.doc_id = doc_id
