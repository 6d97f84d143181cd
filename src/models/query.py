# src/models/query.py

"""User-controlled view parameters for the product list."""

from dataclasses import dataclass, replace
from enum import Enum

from src.config.settings import Settings


class SortKey(str, Enum):
    """Sort orders offered on the list screen."""

    NAME_ASC = "name-asc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"


@dataclass(frozen=True)
class QueryDescriptor:
    """Current search text, category and sort selection.

    Every field has a default, so a descriptor is never partially
    defined.  Mutations produce a new descriptor via the ``with_*``
    helpers.
    """

    search_text: str = ""
    category: str = Settings.ALL_CATEGORIES
    sort_key: SortKey = SortKey(Settings.DEFAULT_SORT_KEY)

    def __post_init__(self) -> None:
        # Wire values such as "price-desc" become SortKey; unknown ones raise ValueError
        object.__setattr__(self, "sort_key", SortKey(self.sort_key))

    def with_search_text(self, search_text: str) -> "QueryDescriptor":
        """Return a copy with a new search text."""
        return replace(self, search_text=search_text or "")

    def with_category(self, category: str) -> "QueryDescriptor":
        """Return a copy with a new category (empty means all)."""
        return replace(
            self, category=category or Settings.ALL_CATEGORIES
        )

    def with_sort_key(self, sort_key: SortKey | str) -> "QueryDescriptor":
        """Return a copy with a new sort key.

        Raises ``ValueError`` for an unknown sort key string.
        """
        return replace(self, sort_key=SortKey(sort_key))
