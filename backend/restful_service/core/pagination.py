"""Token-Based Paging — stateless page slicing over an ordered collection.

Invariants:
    - pageSize must satisfy 0 < pageSize <= max_page_size; checked before anything else
    - Initial page starts at offset 0; next_token encodes offset + returned count
    - Next page start index is (pageOffset - 1) * pageSize — the decoded token does NOT move it
    - A start index past the end yields an empty page, still carrying meta and a next token
    - meta.total is the number of items on THIS page, not the collection size

Design Decisions:
    - Token precedence kept as the service has always behaved: next_page still decodes the
      token so malformed tokens fail with 400, then discards the decoded value in favour of
      pageOffset. Clients navigating purely by token should send the matching pageOffset.
    - Link construction takes the href builder from the caller: core stays free of routing
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from restful_service.core.cursor import MAX_OFFSET, decode_cursor, encode_cursor
from restful_service.core.domain_types import CursorToken, NodeName
from restful_service.core.envelope import build_paged_envelope
from restful_service.core.errors import InvalidPageOffsetError, InvalidPageSizeError


@dataclass(frozen=True)
class Page:
    """One slice of the collection plus the token that continues after it."""
    items: list[Any]
    page_offset: int
    page_size: int
    next_token: CursorToken

    @property
    def total(self) -> int:
        return len(self.items)

    def meta(self) -> dict:
        return {
            "pageOffset": self.page_offset,
            "pageSize": self.page_size,
            "total": self.total,
        }


def check_page_size(page_size: int, max_page_size: int) -> None:
    if page_size <= 0 or page_size > max_page_size:
        raise InvalidPageSizeError(page_size)


def initial_page(collection: Sequence[Any], page_size: int) -> Page:
    """First page of the collection."""
    start = 0
    items = list(collection[start:start + page_size])
    return Page(
        items=items,
        page_offset=start // page_size,
        page_size=page_size,
        next_token=encode_cursor(start + len(items)),
    )


def next_page(
    collection: Sequence[Any], token: str | None, page_size: int, page_offset: int,
) -> Page:
    """Page number page_offset (1-based). Raises MalformedCursorError for a bad token."""
    decode_cursor(token)
    start = (page_offset - 1) * page_size
    if page_offset < 1 or start > MAX_OFFSET:
        raise InvalidPageOffsetError(page_offset)
    items = list(collection[start:start + page_size]) if start < len(collection) else []
    return Page(
        items=items,
        page_offset=page_offset,
        page_size=page_size,
        next_token=encode_cursor(start + len(items)),
    )


def next_link(page: Page, href_for: Callable[[CursorToken, int], str]) -> dict:
    """The single rel=next link, always present even past the last page."""
    return {"href": href_for(page.next_token, page.page_size), "rel": "next"}


def build_page_envelope(
    node_name: NodeName, page: Page, href_for: Callable[[CursorToken, int], str],
) -> dict:
    return build_paged_envelope(
        node_name, page.items, page.meta(), [next_link(page, href_for)],
    )
