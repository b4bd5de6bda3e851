"""Shared fixtures for index and query tests."""

import pytest

from boolean_search.documents import Document


LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
    "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
    "Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
    "mollit anim id est laborum."
)


@pytest.fixture
def documents():
    return [
        Document(id=1, text="Test document number 1. Ut enim ad minim veniam. Look."),
        Document(id=2, text="Test document number 2. Lorem ipsum."),
        Document(id=3, text=LOREM),
    ]


@pytest.fixture
def german_documents():
    return [
        Document(id=10, title="Weiß", text="Der weiße Hai misst große Maße."),
        Document(id=4, title="Masse", text="Die Masse ist weiß und schwer."),
        Document(id=7, title="Straße", text="Eine Straße in München, weiss gestrichen."),
    ]
