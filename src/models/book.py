"""
mdBook preprocessor request models

mdBook sends a preprocessor a JSON array [context, book] on stdin. The
context is modelled here so the renderer and book config can be read with
validation; the book itself stays a plain dict so that every field mdBook
sends (including ones newer releases add) is written back untouched.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PreprocessorContext(BaseModel):
    """
    First element of an mdBook preprocessor request

    Attributes:
        root: Book root directory
        config: Parsed book.toml
        renderer: Name of the renderer the book is being preprocessed for
        mdbook_version: Version of the calling mdBook
    """

    model_config = ConfigDict(extra="allow")

    root: str = ""
    config: Dict[str, Any] = Field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    def preprocessorTable_get(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the [preprocessor.<name>] table from book.toml, if any"""
        table = self.config.get("preprocessor", {}).get(name)
        if isinstance(table, dict):
            return table
        return None


def request_split(data: Any) -> Tuple[PreprocessorContext, Dict[str, Any]]:
    """
    Split a decoded preprocessor request into context and book.

    Args:
        data: The decoded JSON document read from stdin

    Returns:
        (context, book) pair

    Raises:
        ValueError: If data is not a [context, book] array
    """
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("Expected a JSON array [context, book] from mdBook")
    context, book = data
    if not isinstance(book, dict):
        raise ValueError("Book must be a JSON object")
    return PreprocessorContext.model_validate(context), book


def book_sections(book: Dict[str, Any]) -> List[Any]:
    """Top-level book items ('sections' before mdBook 0.5, 'items' after)"""
    if "sections" in book:
        return book["sections"]
    return book.get("items", [])


def chapters_walk(items: List[Any]) -> Iterator[Dict[str, Any]]:
    """
    Yield every chapter dict in document order, depth first.

    Separators and part titles are skipped; sub-chapters follow their
    parent.
    """
    for item in items:
        if isinstance(item, dict) and "Chapter" in item:
            chapter = item["Chapter"]
            yield chapter
            yield from chapters_walk(chapter.get("sub_items", []))
