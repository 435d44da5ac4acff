"""
PasteShare Backend - Paste List Pagination
===========================================

What:  Fixed-size page arithmetic and the list query value object.
Who:   Used by the paste repository (row ranges), the list route (building
       the query from URL params) and list responses (page numbers).

Pages are 1-indexed and hold PAGE_SIZE rows. Page `p` covers rows
[(p-1)*PAGE_SIZE, p*PAGE_SIZE - 1] of the filtered, newest-first result.
"""

import math
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from pasteshare.languages import ALL_LANGUAGES

PAGE_SIZE = 12
RECENT_LIMIT = 6
PAGE_WINDOW = 5


def page_bounds(page: int, page_size: int = PAGE_SIZE) -> Tuple[int, int]:
    """Inclusive (first, last) row indexes for a 1-indexed page."""
    first = (page - 1) * page_size
    return first, first + page_size - 1


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_count / page_size) if total_count > 0 else 0


def page_window(current: int, pages: int, width: int = PAGE_WINDOW) -> List[int]:
    """
    Page numbers to offer around the current page.

    At most `width` consecutive numbers, kept inside [1, pages] and centred
    on `current` where possible:

        page_window(1, 10)  -> [1, 2, 3, 4, 5]
        page_window(6, 10)  -> [4, 5, 6, 7, 8]
        page_window(10, 10) -> [6, 7, 8, 9, 10]
    """
    if pages <= 0:
        return []
    if pages <= width:
        return list(range(1, pages + 1))
    half = width // 2
    start = min(max(1, current - half), pages - width + 1)
    return list(range(start, start + width))


class PasteListQuery(BaseModel):
    """
    Filter and page for the public paste list.

    Immutable: the `with_*` methods return a new query. Changing the text
    query or the language always moves back to page 1; only `with_page`
    keeps the filter and changes the page.
    """

    text_query: str = Field(default="", description="Case-insensitive substring of title or content")
    language: str = Field(default=ALL_LANGUAGES, description="Exact language, or 'all'")
    page: int = Field(default=1, description="1-indexed page number")

    model_config = {"frozen": True}

    @property
    def search_term(self) -> Optional[str]:
        # Blank means no text filter; otherwise the query is matched as typed
        if not self.text_query.strip():
            return None
        return self.text_query

    @property
    def language_filter(self) -> Optional[str]:
        language = self.language.strip()
        if not language or language == ALL_LANGUAGES:
            return None
        return language

    def with_text_query(self, text_query: str) -> "PasteListQuery":
        return self.model_copy(update={"text_query": text_query, "page": 1})

    def with_language(self, language: str) -> "PasteListQuery":
        return self.model_copy(update={"language": language, "page": 1})

    def with_page(self, page: int) -> "PasteListQuery":
        return self.model_copy(update={"page": page})
