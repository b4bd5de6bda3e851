"""
Index builder: constructs an in-memory inverted index from documents.

Both index variants share the build pass implemented by Index: every
document is tokenized and normalized into a set of terms, (term, doc_id)
pairs are grouped by term across the whole collection, and each distinct
term is handed to the variant's add_term() once with all of its document
ids. How a term is stored is up to the variant.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from .documents import DEFAULT_DELIMITER, Document, read_documents_csv
from .errors import DocumentNotFound
from .posting import PostingResult, PostingStore
from .tokenizer import Tokenizer, TokenNormalizer

logger = logging.getLogger(__name__)

INDEX_TYPES = ("non_positional", "permuterm")
PERMUTERM_OPTIONS = ("tree", "terminator")


class Index(ABC):
    """
    Read-only term index over a fixed document collection.
    Built completely in the constructor; never mutated afterwards.
    """

    def __init__(
        self,
        documents: Iterable[Document],
        *,
        tokenizer: Optional[Tokenizer] = None,
        normalizer: Optional[TokenNormalizer] = None,
    ) -> None:
        self.tokenizer = tokenizer or Tokenizer()
        self.normalizer = normalizer or TokenNormalizer()
        self.store = PostingStore()
        self._documents: dict[int, Document] = {}
        for document in documents:
            if document.id in self._documents:
                logger.warning("Duplicate document id %d, keeping the first one", document.id)
                continue
            self._documents[document.id] = document
        self._build()

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        strip_html: bool = False,
        **kwargs,
    ) -> "Index":
        """Read a document CSV file and build an index from it."""
        documents = read_documents_csv(path, delimiter=delimiter, strip_html=strip_html)
        return cls(documents, **kwargs)

    def _build(self) -> None:
        occurrences: dict[str, list[int]] = {}
        for document in self._documents.values():
            terms = self.normalizer.normalize(self.tokenizer.tokenize(document.text))
            for term in terms:
                occurrences.setdefault(term, []).append(document.id)

        for term, doc_ids in occurrences.items():
            self.add_term(term, doc_ids)

        logger.info(
            "%s built: %d documents, %d terms, %d dictionary entries, %d posting lists",
            type(self).__name__,
            len(self._documents),
            len(occurrences),
            len(self.store),
            self.store.posting_list_count,
        )

    @abstractmethod
    def add_term(self, term: str, doc_ids: list[int]) -> None:
        """Store one normalized term and the ids of the documents it occurs in."""

    @abstractmethod
    def lookup(self, raw_term: str) -> list[PostingResult]:
        """
        Normalize raw_term and return the matching dictionary terms with
        their posting lists. An unknown term yields an empty list.
        """

    def get_document(self, doc_id: int) -> Document:
        """Return the document with this id; raises DocumentNotFound."""
        try:
            return self._documents[doc_id]
        except KeyError:
            raise DocumentNotFound(doc_id) from None

    def __len__(self) -> int:
        return len(self._documents)


class NonPositionalInvertedIndex(Index):
    """
    Inverted index: term -> posting list, exact-match lookups only.
    """

    def add_term(self, term: str, doc_ids: list[int]) -> None:
        self.store.add_or_merge_term(term, doc_ids)

    def lookup(self, raw_term: str) -> list[PostingResult]:
        term = self.normalizer.normalize_query_term(raw_term)
        if term is None or term not in self.store:
            logger.debug("No dictionary entry for %r", raw_term)
            return []
        return [PostingResult(term, self.store.postings_for(term))]


def build_index(
    documents: Iterable[Document],
    kind: str = "non_positional",
    **kwargs,
) -> Index:
    """
    Build an index of the given kind ("non_positional" or "permuterm").
    Extra keyword arguments go to the index constructor. The permuterm-only
    options (tree, terminator) are ignored for a non-positional index.
    """
    if kind == "non_positional":
        for option in PERMUTERM_OPTIONS:
            kwargs.pop(option, None)
        return NonPositionalInvertedIndex(documents, **kwargs)
    if kind == "permuterm":
        from .permuterm import PermutermIndex
        return PermutermIndex(documents, **kwargs)
    raise ValueError(f"Unknown index type {kind!r}, expected one of {INDEX_TYPES}")
