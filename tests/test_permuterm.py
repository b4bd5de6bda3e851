"""Tests for permuterm rotation and wildcard lookups."""

import logging

import pytest

from boolean_search.documents import Document
from boolean_search.errors import InvalidTermError, InvalidWildcardPattern
from boolean_search.permuterm import PermutermIndex, rotate, rotate_left, rotations
from boolean_search.tokenizer import TokenNormalizer, Tokenizer


class TestRotate:
    """rotate() moves the wildcard to the end of the query."""

    @pytest.mark.parametrize(
        "term, expected",
        [
            ("X", "X$"),
            ("X*", "$X*"),
            ("*X", "X$*"),
            ("*X*", "X*"),
            ("X*Y", "Y$X*"),
            ("test", "test$"),
            ("test*", "$test*"),
            ("*test", "test$*"),
            ("*test*", "test*"),
            ("test*example", "example$test*"),
        ],
    )
    def test_rotate(self, term, expected):
        assert rotate(term) == expected

    @pytest.mark.parametrize("term", ["a*b*c*d", "***", "a*b*", "*a*b", "a**b", "**a"])
    def test_invalid_patterns_raise(self, term):
        with pytest.raises(InvalidWildcardPattern):
            rotate(term)

    def test_custom_terminator(self):
        assert rotate("te*st", terminator="#") == "st#te*"


class TestRotations:
    def test_rotations_of_terminated_term(self):
        assert rotations("ab$") == ["ab$", "b$a", "$ab"]

    def test_round_trip(self):
        term = "example$"
        n = len(term)

        for k, rotated in enumerate(rotations(term)):
            assert rotated == rotate_left(term, k)
            assert rotate_left(rotated, n - k) == term

    def test_empty(self):
        assert rotations("") == []
        assert rotate_left("", 3) == ""


@pytest.fixture(params=["compact", "simple"])
def tree(request):
    return request.param


class TestPermutermIndex:
    def test_no_wildcard(self, documents, tree):
        index = PermutermIndex(documents, tree=tree)

        result = index.lookup("Lorem")

        assert len(result) == 1
        assert result[0].term == "lorem$"
        assert result[0].postings == [2, 3]

    def test_trailing_wildcard(self, documents, tree):
        index = PermutermIndex(documents, tree=tree)

        result = index.lookup("Lo*")

        assert [r.term for r in result] == ["$look", "$lorem"]
        assert result[0].postings == [1]
        assert result[1].postings == [2, 3]

    def test_leading_wildcard(self, documents, tree):
        index = PermutermIndex(documents, tree=tree)

        result = index.lookup("*olor")

        assert [r.term for r in result] == ["olor$d"]
        assert result[0].postings == [3]

    def test_inner_wildcard(self, documents, tree):
        index = PermutermIndex(documents, tree=tree)

        result = index.lookup("d*r")

        assert sorted(r.term for r in result) == ["r$dolo"]
        assert result[0].postings == [3]

    def test_wildcards_at_both_ends(self, documents, tree):
        index = PermutermIndex(documents, tree=tree)

        result = index.lookup("*olo*")

        # dolor and dolore, each matched once through the rotation starting at "olo"
        assert sorted(r.term for r in result) == ["olor$d", "olore$d"]

    def test_rotations_share_posting_list(self, documents):
        index = PermutermIndex(documents)
        posting_list_id = index.store.entry("lorem$").posting_list_id

        for rotation in rotations("lorem$"):
            assert index.tree.find_exact(rotation) == posting_list_id
            assert index.store.entry(rotation).posting_list_id == posting_list_id
            assert index.store.postings_for(rotation) == [2, 3]

    def test_one_posting_list_per_term(self):
        index = PermutermIndex([Document(id=1, text="ab cd"), Document(id=2, text="ab")])

        assert index.store.posting_list_count == 2
        assert len(index.store) == 6
        assert len(index.tree) == 6

    def test_unknown_terms(self, documents):
        index = PermutermIndex(documents)

        assert index.lookup("zebra") == []
        assert index.lookup("zeb*") == []
        assert index.lookup("*") == []
        assert index.lookup("lore") == []

    def test_invalid_wildcard_query(self, documents):
        index = PermutermIndex(documents)

        with pytest.raises(InvalidWildcardPattern):
            index.lookup("l*r*m")

    def test_terminator_in_query(self, documents):
        index = PermutermIndex(documents)

        with pytest.raises(InvalidTermError):
            index.lookup("lor$m")

    def test_wildcards_without_letters(self, documents):
        index = PermutermIndex(documents)

        assert index.lookup("**") == []
        with pytest.raises(InvalidWildcardPattern):
            index.lookup("***")
        with pytest.raises(InvalidWildcardPattern):
            index.lookup(" *.*.* ")

    def test_terminator_in_text_with_default_pipeline(self, caplog):
        with caplog.at_level(logging.WARNING, logger="boolean_search.permuterm"):
            index = PermutermIndex([Document(id=1, text="Das kostet $5 heute.")])

        assert "Skipping term '$5'" in caplog.text
        assert index.lookup("heute")[0].postings == [1]
        assert [r.postings for r in index.lookup("kost*")] == [[1]]
        assert "$5$" not in index.store

    def test_terminator_in_indexed_term(self):
        tokenizer = Tokenizer(split_rule=str.isspace)

        index = PermutermIndex([Document(id=1, text="costs 5$ today")], tokenizer=tokenizer)

        assert index.lookup("today")[0].postings == [1]
        assert index.store.posting_list_count == 2

    def test_stemmed_wildcard_queries(self, tree):
        normalizer = TokenNormalizer(stem=True)
        index = PermutermIndex(
            [Document(id=1, text="Die Häuser sind alt."), Document(id=2, text="Ein Haus.")],
            tree=tree,
            normalizer=normalizer,
        )

        assert index.lookup("häuser")[0].postings == [1]
        assert [r.postings for r in index.lookup("häuser*")] == [[1]]
        assert [r.postings for r in index.lookup("*häuser")] == [[1]]

    def test_custom_terminator(self, documents):
        index = PermutermIndex(documents, terminator="#")

        assert [r.term for r in index.lookup("Lo*")] == ["#look", "#lorem"]

    def test_invalid_configuration(self, documents):
        with pytest.raises(ValueError):
            PermutermIndex(documents, tree="btree")
        with pytest.raises(ValueError):
            PermutermIndex(documents, terminator="*")
