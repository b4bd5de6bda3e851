"""
Permuterm index for wildcard queries.

Every term is stored with a terminator appended, under every rotation of the
terminated string. A wildcard query is rotated so that the wildcard ends up
last, which turns it into a prefix query against the prefix tree:

    X      ->  X$       exact lookup
    X*     ->  $X*
    *X     ->  X$*
    X*Y    ->  Y$X*
    *X*    ->  X*
"""

import logging
from typing import Iterable

from .documents import Document
from .errors import InvalidTermError, InvalidWildcardPattern
from .index_builder import Index
from .posting import PostingResult
from .prefix_tree import TREE_TYPES
from .tokenizer import WILDCARD

logger = logging.getLogger(__name__)

TERMINATOR = "$"


def rotate_left(term: str, k: int) -> str:
    """Move the first k characters of term to its end."""
    if not term:
        return term
    k %= len(term)
    return term[k:] + term[:k]


def rotations(term: str) -> list[str]:
    """All len(term) rotations of term, starting with term itself."""
    return [rotate_left(term, i) for i in range(len(term))]


def rotate(term: str, terminator: str = TERMINATOR) -> str:
    """
    Rotate a (normalized) query term so that any wildcard is at the end and
    the terminator marks where the original term ended.
    Raises InvalidWildcardPattern for unsupported wildcard placements.
    """
    wildcard_count = term.count(WILDCARD)
    starts = term.startswith(WILDCARD)
    ends = term.endswith(WILDCARD)

    if wildcard_count > 2:
        raise InvalidWildcardPattern(term, "at most two wildcards are supported")
    if wildcard_count == 2:
        if not (starts and ends):
            raise InvalidWildcardPattern(term, "two wildcards must be at the start and the end")
        return term[1:]
    if wildcard_count == 1:
        if ends:
            return terminator + term
        if starts:
            return term[1:] + terminator + WILDCARD
        head, tail = term.split(WILDCARD)
        return tail + terminator + head + WILDCARD
    return term + terminator


class PermutermIndex(Index):
    """
    Index answering exact and wildcard term queries through a prefix tree
    holding every rotation of every terminated term.
    - tree: "compact" (default) or "simple", see prefix_tree.TREE_TYPES
    """

    def __init__(
        self,
        documents: Iterable[Document],
        *,
        tree: str = "compact",
        terminator: str = TERMINATOR,
        **kwargs,
    ) -> None:
        if tree not in TREE_TYPES:
            raise ValueError(f"Unknown prefix tree type {tree!r}, expected one of {tuple(TREE_TYPES)}")
        if len(terminator) != 1 or terminator == WILDCARD:
            raise ValueError(f"Terminator must be a single non-wildcard character, got {terminator!r}")
        self.terminator = terminator
        self.tree = TREE_TYPES[tree]()
        super().__init__(documents, **kwargs)

    def add_term(self, term: str, doc_ids: list[int]) -> None:
        if self.terminator in term:
            logger.warning(
                "Skipping term %r: contains the permuterm terminator %r", term, self.terminator
            )
            return
        terminated = term + self.terminator
        is_new = terminated not in self.store
        posting_list_id = self.store.add_or_merge_term(terminated, doc_ids)
        if not is_new:
            return
        for rotation in rotations(terminated):
            self.store.register_alias(rotation, posting_list_id)
            self.tree.insert(rotation, posting_list_id)

    def rotate(self, term: str) -> str:
        return rotate(term, self.terminator)

    def lookup(self, raw_term: str) -> list[PostingResult]:
        term = self.normalizer.normalize_query_term(raw_term)
        if term is None:
            # Nothing alphanumeric survived; the wildcard layout is still checked.
            if WILDCARD in raw_term:
                self.rotate(raw_term.strip())
            return []
        if self.terminator in term:
            raise InvalidTermError(term, self.terminator)

        rotated = self.rotate(term)
        if rotated.endswith(WILDCARD):
            matches = self.tree.find_with_prefix(rotated[:-1])
            logger.debug("Wildcard %r rotated to %r: %d matches", raw_term, rotated, len(matches))
            return [
                PostingResult(match.term, self.store.posting_list(match.posting_list_id))
                for match in matches
            ]

        posting_list_id = self.tree.find_exact(rotated)
        if posting_list_id is None:
            logger.debug("No dictionary entry for %r", raw_term)
            return []
        return [PostingResult(rotated, self.store.posting_list(posting_list_id))]
