"""Boolean and wildcard term search over an in-memory document collection."""

from .documents import Document, read_documents_csv
from .errors import BooleanSearchError, DocumentNotFound, InvalidTermError, InvalidWildcardPattern
from .index_builder import Index, NonPositionalInvertedIndex, build_index
from .permuterm import PermutermIndex, rotate
from .posting import PostingResult, PostingStore
from .prefix_tree import CompactPrefixTree, PrefixTree
from .query import QueryRunner
from .tokenizer import Tokenizer, TokenNormalizer
