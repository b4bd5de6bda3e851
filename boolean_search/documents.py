"""
Document records and the CSV reader that produces them.

The expected file is a delimited export with a header row:
    id, url, pub_date, title, news_text
Quote characters are kept as literal text.
"""

import csv
import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .tokenizer import extract_text_from_html

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "\t"

# Document field -> CSV column name
CSV_COLUMNS = {
    "id": "id",
    "source": "url",
    "date": "pub_date",
    "title": "title",
    "text": "news_text",
}

# Article bodies can exceed the csv module's default 128 KiB field limit.
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


@dataclass(frozen=True)
class Document:
    """
    One ingested document.
    - id: externally assigned identifier (not necessarily contiguous)
    - source: URL the document was taken from, if known
    - date: publication date as written in the source, if known
    """

    id: int
    text: str
    title: str = ""
    source: Optional[str] = None
    date: Optional[str] = None


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_documents(
    stream: TextIO,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    strip_html: bool = False,
) -> list[Document]:
    """
    Parse documents from an open text stream.
    Rows whose id is not an integer are skipped with a warning.
    """
    reader = csv.DictReader(stream, delimiter=delimiter, quoting=csv.QUOTE_NONE)
    documents: list[Document] = []
    for line_no, row in enumerate(reader, start=2):
        raw_id = row.get(CSV_COLUMNS["id"])
        try:
            doc_id = int(raw_id.strip())
        except (AttributeError, ValueError):
            logger.warning("Skipping row %d: invalid document id %r", line_no, raw_id)
            continue

        text = row.get(CSV_COLUMNS["text"]) or ""
        if strip_html and text:
            text = extract_text_from_html(text)

        documents.append(
            Document(
                id=doc_id,
                text=text,
                title=(row.get(CSV_COLUMNS["title"]) or "").strip(),
                source=_optional(row.get(CSV_COLUMNS["source"])),
                date=_optional(row.get(CSV_COLUMNS["date"])),
            )
        )
    return documents


def read_documents_csv(
    path: Path | str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    strip_html: bool = False,
) -> list[Document]:
    """
    Read documents from a CSV file on disk.
    Raises FileNotFoundError if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")
    with open(path, "r", encoding="utf-8", newline="") as f:
        documents = parse_documents(f, delimiter=delimiter, strip_html=strip_html)
    logger.info("Read %d documents from %s", len(documents), path)
    return documents


def parse_documents_text(text: str, **kwargs) -> list[Document]:
    """Parse documents from an in-memory CSV string."""
    return parse_documents(io.StringIO(text, newline=""), **kwargs)
