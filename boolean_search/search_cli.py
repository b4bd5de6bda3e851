"""
Interactive command-line search over a document CSV file.

Supports single-term queries and AND of two terms. With the permuterm index
terms may contain wildcards (lo*, *ung, sch*ung, *eis*).

Usage:
    python -m boolean_search.search_cli \
        --csv data/postillon.csv \
        --index permuterm
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Iterable, List

from .documents import DEFAULT_DELIMITER, read_documents_csv
from .errors import BooleanSearchError
from .index_builder import INDEX_TYPES, Index, build_index
from .permuterm import PermutermIndex
from .prefix_tree import TREE_TYPES
from .query import QueryRunner
from .tokenizer import TokenNormalizer

_AND = re.compile(r"\s+AND\s+", re.IGNORECASE)


def parse_query(raw_query: str) -> List[str]:
    """
    Split a query line into its terms: "a AND b", "a b" or "a".
    Raises ValueError for more than two terms.
    """
    parts = _AND.split(raw_query.strip())
    if len(parts) == 1:
        parts = parts[0].split()
    terms = [p.strip() for p in parts if p.strip()]
    if len(terms) > 2:
        raise ValueError("Only one term or an AND of two terms is supported.")
    return terms


def load_index(
    csv_path: Path,
    *,
    kind: str = "non_positional",
    tree: str = "compact",
    delimiter: str = DEFAULT_DELIMITER,
    stem: bool = False,
    strip_html: bool = False,
) -> Index:
    documents = read_documents_csv(csv_path, delimiter=delimiter, strip_html=strip_html)
    return build_index(documents, kind, normalizer=TokenNormalizer(stem=stem), tree=tree)


def print_index_stats(index: Index) -> None:
    print("\n" + "=" * 50)
    print(f"INDEX STATISTICS ({type(index).__name__})")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {len(index)} |")
    print(f"| Dictionary entries          | {len(index.store)} |")
    print(f"| Posting lists               | {index.store.posting_list_count} |")
    if isinstance(index, PermutermIndex):
        print(f"| Prefix tree nodes           | {index.tree.node_count()} |")
    print()


def print_query_result(index: Index, query: str, doc_ids: List[int], show_documents: bool = False) -> None:
    """
    Print the ids a query returned and, optionally, the documents themselves.
    """
    ids = ", ".join(str(d) for d in doc_ids)
    print(f"Query '{query}' returned {len(doc_ids)} results: {ids}")
    if not show_documents:
        return
    for doc_id in doc_ids:
        document = index.get_document(doc_id)
        print(f"---------------------- Document {doc_id} ----------------------")
        print(document.title)
        if document.source:
            print(document.source)
        print("----------------------------------------------------------")
        print(document.text)
        print(f"------------------ End of Document {doc_id} -------------------")
        print()


def run_search_loop(index: Index, show_documents: bool = False) -> None:
    """
    Interactive command-line search loop.
    """
    runner = QueryRunner(index)
    print(f"Loaded index over {len(index)} documents.")
    print("Enter a term or 'term AND term'. Empty line or Ctrl+C to exit.")

    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break

        try:
            terms = parse_query(raw_query)
            doc_ids = runner.query(*terms)
        except (BooleanSearchError, ValueError) as e:
            print(f"Error: {e}")
            continue

        print_query_result(index, " AND ".join(terms), doc_ids, show_documents=show_documents)


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Boolean and wildcard term search over a document CSV file.")
    parser.add_argument(
        "--csv",
        type=Path,
        default=Path("data/postillon.csv"),
        help="Path to the document CSV file.",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="CSV field delimiter (default: tab).",
    )
    parser.add_argument(
        "--index",
        choices=INDEX_TYPES,
        default="non_positional",
        help="Index type to build.",
    )
    parser.add_argument(
        "--tree",
        choices=tuple(TREE_TYPES),
        default="compact",
        help="Prefix tree backing the permuterm index.",
    )
    parser.add_argument(
        "--stem",
        action="store_true",
        help=(
            "Apply Snowball stemming to indexed and query terms. Wildcard queries "
            "stem the word end after the last wildcard, or the X of X*."
        ),
    )
    parser.add_argument(
        "--strip-html",
        action="store_true",
        help="Strip HTML markup from document text before indexing.",
    )
    parser.add_argument(
        "--show-documents",
        action="store_true",
        help="Print the full text of every matching document.",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print index statistics after building.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.csv.exists():
        print(f"Document file not found: {args.csv}")
        sys.exit(1)

    try:
        index = load_index(
            args.csv,
            kind=args.index,
            tree=args.tree,
            delimiter=args.delimiter,
            stem=args.stem,
            strip_html=args.strip_html,
        )
    except BooleanSearchError as e:
        print(f"Could not build index: {e}")
        sys.exit(1)

    if args.stats:
        print_index_stats(index)

    run_search_loop(index, show_documents=args.show_documents)


if __name__ == "__main__":
    main()
