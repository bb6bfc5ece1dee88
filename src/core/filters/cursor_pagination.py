"""
Cursor-based pagination utilities.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from core.models.pagination import ListMode
from core.utils.constants import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT

ItemT = TypeVar("ItemT")

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


class CursorPagination:
    """
    Cursor (keyset) pagination helper.

    A cursor is the identity of the last item on the previous page; the next
    page holds the items whose identity is strictly lower. Pages are fetched
    with one extra row so continuation is known without a second query.

    Typical usage:
    1. Pick the listing mode from which parameters are present
    2. Resolve the effective limit and clean the cursor
    3. Fetch `limit + 1` rows and shape them into a page
    """

    @staticmethod
    def select_mode(params: Mapping[str, Any]) -> ListMode:
        """
        Decide between cursor pagination and the legacy listing.

        A present `limit` selects pagination even when empty; `cursor` only
        counts when it is non-blank.

        Example:
            select_mode({"limit": ""})    → ListMode.CURSOR
            select_mode({"cursor": "  "}) → ListMode.LEGACY
        """
        if params.get("limit") is not None:
            return ListMode.CURSOR

        if CursorPagination.clean_cursor(params.get("cursor")):
            return ListMode.CURSOR

        return ListMode.LEGACY

    @staticmethod
    def resolve_limit(raw: Any) -> int:
        """
        Parse the requested page size.

        The leading integer of the value is used ("12abc" → 12, "3.9" → 3)
        and clamped to [MIN_LIMIT, MAX_LIMIT]. Values without one fall back
        to DEFAULT_LIMIT.

        Example:
            resolve_limit("500") → 200
            resolve_limit("abc") → 60
        """
        if isinstance(raw, bool):
            return DEFAULT_LIMIT

        if isinstance(raw, int):
            parsed = raw
        else:
            match = _LEADING_INTEGER.match(str(raw) if raw is not None else "")
            if not match:
                return DEFAULT_LIMIT
            parsed = int(match.group(1))

        return max(MIN_LIMIT, min(parsed, MAX_LIMIT))

    @staticmethod
    def clean_cursor(raw: Any) -> str:
        """Return the trimmed cursor, or an empty string when absent."""
        return raw.strip() if isinstance(raw, str) else ""

    @staticmethod
    def paginate(
        rows: Sequence[ItemT],
        *,
        limit: int,
        identity: Callable[[ItemT], str],
    ) -> tuple[list[ItemT], bool, str | None]:
        """
        Shape `limit + 1` fetched rows into a page.

        Args:
            rows: Rows fetched in descending identity order
            limit: Effective page size
            identity: Returns the cursor value of a row

        Returns:
            A tuple containing:
            - page_items: At most `limit` rows
            - has_more: True if the fetch returned more than `limit` rows
            - next_cursor: Identity of the last page row when has_more

        Example:
            rows = [30, 20, 10]
            limit = 2

            → ([30, 20], True, "20")
        """
        has_more = len(rows) > limit
        page_items = list(rows[:limit])
        next_cursor = identity(page_items[-1]) if has_more and page_items else None

        return page_items, has_more, next_cursor
