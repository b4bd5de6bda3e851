"""
Term dictionary and posting store shared by both index variants.

A posting list is the ascending, duplicate-free list of document ids a term
occurs in. Lists are addressed by an integer id handed out from 1 upward at
build time; ids are never reused or renumbered.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


@dataclass
class DictionaryEntry:
    """
    Dictionary value for one term.
    - posting_list_id: id of the posting list in the store
    - posting_list_size: cached length of that list (kept in sync on merge)
    """

    posting_list_id: int
    posting_list_size: int


@dataclass
class PostingResult:
    """A matched dictionary term and its posting list."""

    term: str
    postings: list[int]

    def __repr__(self) -> str:
        return f"PostingResult(term={self.term!r}, postings={self.postings})"


def _sorted_unique(doc_ids: Iterable[int]) -> list[int]:
    return sorted(set(doc_ids))


class PostingStore:
    """
    Term dictionary (term -> DictionaryEntry) plus the posting lists
    (posting list id -> sorted doc ids).

    Several dictionary keys may share one posting list; the permuterm index
    registers every rotation of a term that way.
    """

    def __init__(self) -> None:
        self._dictionary: dict[str, DictionaryEntry] = {}
        self._postings: dict[int, list[int]] = {}
        self._keys_by_list: dict[int, list[str]] = {}
        self._next_posting_list_id = 1

    def add_or_merge_term(self, term: str, doc_ids: Iterable[int]) -> int:
        """
        Add a term with its document ids, or merge the ids into the term's
        existing posting list. Returns the posting list id.
        """
        entry = self._dictionary.get(term)
        if entry is None:
            posting_list_id = self._next_posting_list_id
            self._next_posting_list_id += 1
            postings = _sorted_unique(doc_ids)
            self._postings[posting_list_id] = postings
            self._dictionary[term] = DictionaryEntry(posting_list_id, len(postings))
            self._keys_by_list[posting_list_id] = [term]
            return posting_list_id

        posting_list_id = entry.posting_list_id
        postings = self._postings[posting_list_id]
        postings.extend(doc_ids)
        postings[:] = _sorted_unique(postings)
        for key in self._keys_by_list[posting_list_id]:
            self._dictionary[key].posting_list_size = len(postings)
        logger.debug("Merged postings for %r, list %d now has %d ids", term, posting_list_id, len(postings))
        return posting_list_id

    def register_alias(self, term: str, posting_list_id: int) -> None:
        """Point an additional dictionary key at an existing posting list."""
        if posting_list_id not in self._postings:
            raise KeyError(f"Unknown posting list id: {posting_list_id}")
        existing = self._dictionary.get(term)
        if existing is not None:
            if existing.posting_list_id == posting_list_id:
                return
            self._keys_by_list[existing.posting_list_id].remove(term)
        size = len(self._postings[posting_list_id])
        self._dictionary[term] = DictionaryEntry(posting_list_id, size)
        self._keys_by_list[posting_list_id].append(term)

    def entry(self, term: str) -> DictionaryEntry | None:
        """Return the dictionary entry for a term, or None."""
        return self._dictionary.get(term)

    def posting_list(self, posting_list_id: int) -> list[int]:
        """Return the posting list stored under an id."""
        return self._postings[posting_list_id]

    def postings_for(self, term: str) -> list[int]:
        """Return the posting list for a term, or empty list."""
        entry = self._dictionary.get(term)
        if entry is None:
            return []
        return self._postings[entry.posting_list_id]

    def terms(self) -> Iterator[str]:
        """Iterate over all dictionary keys."""
        return iter(self._dictionary)

    @property
    def posting_list_count(self) -> int:
        return len(self._postings)

    def __len__(self) -> int:
        return len(self._dictionary)

    def __contains__(self, term: str) -> bool:
        return term in self._dictionary

