"""
Tokenizer and term normalizer.
Splits document text into raw tokens with configurable character rules and
reduces tokens to index terms (lowercase, German characters folded, stop words
removed). Optional Snowball stemming and HTML text extraction.
"""

import warnings
from typing import Callable, Iterable

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

from nltk.stem import SnowballStemmer

# Replacements applied after lowercasing, in this order.
DIACRITIC_FOLDS = (
    ("ü", "ue"),
    ("ä", "ae"),
    ("ö", "oe"),
    ("ß", "ss"),
)

DEFAULT_STOP_WORDS = frozenset({"der", "die", "das", "den", "dem", "des", "ein", "eine"})

DEFAULT_STEM_LANGUAGE = "german"

# Kept by normalization. See TokenNormalizer.stem_pattern for stemming.
WILDCARD = "*"


def split_on_non_alphanumeric(char: str) -> bool:
    return not char.isalnum()


def erase_whitespace(char: str) -> bool:
    return char.isspace()


class Tokenizer:
    """
    Splits text into tokens.

    split_rule decides whether a character ends the current token. A split
    character is dropped when erase_rule holds for it; otherwise it becomes
    the first character of the next token (so "S." yields "S" and ".").
    """

    def __init__(
        self,
        split_rule: Callable[[str], bool] = split_on_non_alphanumeric,
        erase_rule: Callable[[str], bool] = erase_whitespace,
    ) -> None:
        self.split_rule = split_rule
        self.erase_rule = erase_rule

    def tokenize(self, text: str) -> list[str]:
        """Return raw (not normalized) tokens, including the trailing one."""
        tokens: list[str] = []
        start = 0
        for i, char in enumerate(text):
            if not self.split_rule(char):
                continue
            if i > start:
                tokens.append(text[start:i])
            start = i + 1 if self.erase_rule(char) else i
        tokens.append(text[start:])
        return tokens

    __call__ = tokenize


def fold_diacritics(token: str) -> str:
    for source, target in DIACRITIC_FOLDS:
        token = token.replace(source, target)
    return token


def has_alphanumeric(token: str) -> bool:
    return any(c.isalnum() for c in token)


class TokenNormalizer:
    """
    Turns raw tokens into terms. Used for both indexing and query terms.

    Steps per token: strip, lowercase, fold German characters, optionally
    stem. Tokens that end up empty, without any letter or digit, or in the
    stop word list are dropped. Duplicates are removed keeping first-seen
    order.
    """

    def __init__(
        self,
        stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
        *,
        stem: bool = False,
        language: str = DEFAULT_STEM_LANGUAGE,
    ) -> None:
        self.stop_words = frozenset(stop_words)
        self._stemmer = SnowballStemmer(language) if stem else None

    def normalize_token(self, token: str) -> str:
        term = fold_diacritics(token.strip().lower())
        if self._stemmer is not None and term:
            term = self.stem_pattern(term)
        return term

    def stem_pattern(self, term: str) -> str:
        """
        Stem the parts of a wildcard query that line up with stemmed index
        terms: the text after the last wildcard (it ends a word, as in *X and
        X*Y) or the prefix of X*. The infix of *X* is left alone. Terms without
        a wildcard are stemmed whole.
        """
        head, wildcard, tail = term.rpartition(WILDCARD)
        if not wildcard:
            return self._stemmer.stem(term)
        if tail:
            return head + wildcard + self._stemmer.stem(tail)
        if head and WILDCARD not in head:
            return self._stemmer.stem(head) + wildcard
        return term

    def normalize(self, tokens: Iterable[str]) -> list[str]:
        """Normalize tokens; result is deduplicated and order-preserving."""
        terms: dict[str, None] = {}
        for token in tokens:
            term = self.normalize_token(token)
            if not term or not has_alphanumeric(term) or term in self.stop_words:
                continue
            terms.setdefault(term)
        return list(terms)

    def normalize_query_term(self, raw_term: str) -> str | None:
        """Normalize a single query term; None when nothing survives."""
        terms = self.normalize([raw_term])
        return terms[0] if terms else None


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)
