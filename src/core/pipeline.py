# src/core/pipeline.py

"""Pure category -> search -> sort projection of a product list."""

import logging
import math
import unicodedata

from src.config.settings import Settings
from src.models.product import Product
from src.models.query import QueryDescriptor, SortKey

logger = logging.getLogger("catalog_browser.pipeline")


def _collation_key(title: str | None) -> tuple[str, str]:
    """Case- and accent-insensitive key, accents as secondary order.

    ``"Éclair"`` sorts beside ``"eclair"`` rather than after ``"z"``.
    """
    if not isinstance(title, str):
        title = ""
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base, folded


def _price_key(price: float | None) -> float:
    """Numeric price, with missing or non-finite values as zero."""
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return 0.0
    if not math.isfinite(price):
        return 0.0
    return float(price)


class ProductQueryPipeline:
    """Project a fetched product list through a ``QueryDescriptor``.

    Stages run in a fixed order (category, search, sort) so that the
    O(m log m) sort only sees the filtered survivors.  Nothing here
    mutates the input or raises on malformed products: a missing title
    never matches a search and sorts as ``""``; a missing price sorts
    as ``0``.
    """

    def __init__(self, search_description: bool | None = None) -> None:
        self.search_description: bool = (
            Settings.SEARCH_INCLUDES_DESCRIPTION
            if search_description is None
            else search_description
        )

    @staticmethod
    def filter_by_category(
        products: list[Product], category: str,
    ) -> list[Product]:
        """Keep products whose category equals *category* exactly."""
        if category == Settings.ALL_CATEGORIES:
            return list(products)
        return [p for p in products if p.category == category]

    def filter_by_search(
        self, products: list[Product], search_text: str,
    ) -> list[Product]:
        """Keep products whose title contains *search_text*.

        Matching is a case-insensitive substring test on the trimmed
        text; the description is also scanned when
        ``search_description`` is set.
        """
        needle = (search_text or "").strip().lower()
        if not needle:
            return list(products)

        kept: list[Product] = []
        for product in products:
            title = product.title if isinstance(product.title, str) else ""
            if needle in title.lower():
                kept.append(product)
                continue
            if self.search_description and isinstance(
                product.description, str
            ) and needle in product.description.lower():
                kept.append(product)
        return kept

    @staticmethod
    def sort(products: list[Product], sort_key: SortKey) -> list[Product]:
        """Return a new, stably sorted list for *sort_key*."""
        if sort_key is SortKey.PRICE_ASC:
            return sorted(products, key=lambda p: _price_key(p.price))
        if sort_key is SortKey.PRICE_DESC:
            # Negated key keeps equal prices in input order
            return sorted(products, key=lambda p: -_price_key(p.price))
        return sorted(products, key=lambda p: _collation_key(p.title))

    def project(
        self, products: list[Product], query: QueryDescriptor,
    ) -> list[Product]:
        """Apply category, search and sort stages in that order."""
        narrowed = self.filter_by_category(products, query.category)
        matched = self.filter_by_search(narrowed, query.search_text)
        result = self.sort(matched, query.sort_key)
        logger.debug(
            "Projected %d -> %d products (category=%r, search=%r, sort=%s)",
            len(products),
            len(result),
            query.category,
            query.search_text,
            query.sort_key.value,
        )
        return result


def project(
    products: list[Product],
    query: QueryDescriptor,
    search_description: bool | None = None,
) -> list[Product]:
    """Module-level shortcut for ``ProductQueryPipeline.project``."""
    return ProductQueryPipeline(search_description).project(products, query)
