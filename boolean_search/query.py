"""
Boolean query runner: single-term lookups and pairwise AND.

Posting lists coming from the index are sorted ascending without
duplicates, which is what the linear intersection relies on.
"""

import logging
from typing import Optional

from .index_builder import Index

logger = logging.getLogger(__name__)


def union_postings(postings_lists: list[list[int]]) -> list[int]:
    """Merge several sorted posting lists into one sorted, duplicate-free list."""
    if len(postings_lists) == 1:
        return list(postings_lists[0])
    merged: set[int] = set()
    for postings in postings_lists:
        merged.update(postings)
    return sorted(merged)


def intersect_postings(first: list[int], second: list[int]) -> list[int]:
    """
    Intersect two sorted posting lists (AND) with a single merge walk.
    Advances both cursors on a match, otherwise the one at the smaller id.
    """
    result: list[int] = []
    i = j = 0
    while i < len(first) and j < len(second):
        d1 = first[i]
        d2 = second[j]
        if d1 == d2:
            result.append(d1)
            i += 1
            j += 1
        elif d1 < d2:
            i += 1
        else:
            j += 1
    return result


class QueryRunner:
    """Runs boolean queries against any Index implementation."""

    def __init__(self, index: Index) -> None:
        self.index = index

    def postings(self, term: str) -> list[int]:
        """
        All documents matching term. A wildcard term may match several
        dictionary entries; their posting lists are merged.
        """
        results = self.index.lookup(term)
        if not results:
            return []
        return union_postings([r.postings for r in results])

    def query(self, term: str, other_term: Optional[str] = None) -> list[int]:
        """
        Query by one term, or by the conjunction of two terms.
        Returns sorted document ids.
        """
        first = self.postings(term)
        if other_term is None:
            logger.debug("Query %r: %d documents", term, len(first))
            return first
        result = intersect_postings(first, self.postings(other_term))
        logger.debug("Query %r AND %r: %d documents", term, other_term, len(result))
        return result
