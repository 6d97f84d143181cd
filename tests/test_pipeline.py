# tests/test_pipeline.py

"""Tests for the category -> search -> sort product projection."""

import unittest

from src.core.pipeline import ProductQueryPipeline, project
from src.models.product import Product
from src.models.query import QueryDescriptor, SortKey


def _make_product(
    product_id: int,
    title: str | None,
    category: str | None = "misc",
    price: float | None = 10.0,
    description: str | None = None,
) -> Product:
    """Create a minimal Product."""
    return Product(
        id=product_id,
        title=title,
        category=category,
        price=price,
        description=description,
    )


def _scenario_products() -> list[Product]:
    return [
        _make_product(1, "iPhone 9", "smartphones", 549),
        _make_product(2, "Samsung Universe 9", "smartphones", 1249),
        _make_product(3, "Red Lipstick", "beauty", 12),
    ]


def _catalog() -> list[Product]:
    """A wider collection with ties, gaps and mixed case."""
    return [
        _make_product(10, "banana phone", "smartphones", 300),
        _make_product(11, "Apple Watch", "accessories", 300),
        _make_product(12, "apple pie", "groceries", 5),
        _make_product(13, "Zebra Case", "accessories", 25),
        _make_product(14, "Éclair Lamp", "home", 40),
        _make_product(15, "Desk Lamp", "home", 40),
        _make_product(16, None, "home", None),
        _make_product(17, "Laptop Pro", "laptops", 1999.99),
    ]


def _ids(products: list[Product]) -> list[int]:
    return [p.id for p in products]


class TestScenarios(unittest.TestCase):
    """End-to-end projections of a known collection."""

    def test_category_then_price_desc(self) -> None:
        """Smartphones sorted by price, high to low."""
        query = QueryDescriptor(
            category="smartphones", sort_key=SortKey.PRICE_DESC
        )
        self.assertEqual(_ids(project(_scenario_products(), query)), [2, 1])

    def test_string_sort_key(self) -> None:
        """A descriptor built from the wire value 'price-desc' sorts by price."""
        query = QueryDescriptor(
            category="smartphones",
            sort_key="price-desc",  # type: ignore[arg-type]
        )
        self.assertEqual(_ids(project(_scenario_products(), query)), [2, 1])

    def test_search_lip(self) -> None:
        """'lip' across all categories finds the lipstick."""
        query = QueryDescriptor(search_text="lip")
        self.assertEqual(_ids(project(_scenario_products(), query)), [3])


class TestCategoryStage(unittest.TestCase):
    """ProductQueryPipeline.filter_by_category behaviour."""

    def test_all_passes_through(self) -> None:
        """The 'all' sentinel keeps everything."""
        products = _catalog()
        kept = ProductQueryPipeline.filter_by_category(products, "all")
        self.assertEqual(kept, products)
        self.assertIsNot(kept, products)

    def test_exact_match_only(self) -> None:
        """Every survivor has exactly the requested category."""
        kept = ProductQueryPipeline.filter_by_category(_catalog(), "home")
        self.assertEqual(_ids(kept), [14, 15, 16])
        self.assertTrue(all(p.category == "home" for p in kept))

    def test_case_sensitive(self) -> None:
        """Category values are compared case-sensitively."""
        kept = ProductQueryPipeline.filter_by_category(_catalog(), "Home")
        self.assertEqual(kept, [])

    def test_missing_category_never_matches(self) -> None:
        """A product without category is excluded from any filter."""
        products = [_make_product(1, "X", category=None)]
        self.assertEqual(
            ProductQueryPipeline.filter_by_category(products, "home"), []
        )


class TestSearchStage(unittest.TestCase):
    """ProductQueryPipeline.filter_by_search behaviour."""

    def setUp(self) -> None:
        self.pipeline = ProductQueryPipeline(search_description=False)

    def test_blank_search_passes_through(self) -> None:
        """Empty or whitespace-only text keeps everything."""
        for text in ("", "   ", "\t"):
            with self.subTest(text=text):
                self.assertEqual(
                    len(self.pipeline.filter_by_search(_catalog(), text)),
                    len(_catalog()),
                )

    def test_trimmed_case_insensitive_substring(self) -> None:
        """'  APPLE ' matches both apple titles."""
        kept = self.pipeline.filter_by_search(_catalog(), "  APPLE ")
        self.assertEqual(_ids(kept), [11, 12])
        for product in kept:
            assert product.title is not None
            self.assertIn("apple", product.title.lower())

    def test_missing_title_never_matches(self) -> None:
        """A product without a title is simply skipped."""
        kept = self.pipeline.filter_by_search(_catalog(), "lamp")
        self.assertEqual(_ids(kept), [14, 15])

    def test_description_ignored_by_default(self) -> None:
        """Title-only search does not look at descriptions."""
        products = [_make_product(1, "Widget", description="contains lip balm")]
        self.assertEqual(self.pipeline.filter_by_search(products, "lip"), [])

    def test_description_matched_when_enabled(self) -> None:
        """The description scope is a configuration flag."""
        pipeline = ProductQueryPipeline(search_description=True)
        products = [
            _make_product(1, "Widget", description="Contains LIP balm"),
            _make_product(2, "Gadget", description=None),
        ]
        self.assertEqual(_ids(pipeline.filter_by_search(products, "lip")), [1])


class TestSortStage(unittest.TestCase):
    """ProductQueryPipeline.sort behaviour."""

    def test_name_asc_case_insensitive(self) -> None:
        """Lower- and upper-case titles interleave alphabetically."""
        result = ProductQueryPipeline.sort(_catalog(), SortKey.NAME_ASC)
        # Missing title sorts as "" and therefore first
        self.assertEqual(_ids(result), [16, 12, 11, 10, 15, 14, 17, 13])

    def test_accented_title_sorts_by_base_letter(self) -> None:
        """'Éclair' sorts among the e's, not after 'z'."""
        products = [
            _make_product(1, "Zip"),
            _make_product(2, "Éclair"),
            _make_product(3, "Fig"),
            _make_product(4, "Date"),
        ]
        result = ProductQueryPipeline.sort(products, SortKey.NAME_ASC)
        self.assertEqual(_ids(result), [4, 2, 3, 1])

    def test_price_asc_non_decreasing(self) -> None:
        """Prices never decrease along the output."""
        result = ProductQueryPipeline.sort(_catalog(), SortKey.PRICE_ASC)
        prices = [p.price or 0.0 for p in result]
        self.assertEqual(prices, sorted(prices))

    def test_price_desc_non_increasing(self) -> None:
        """Prices never increase along the output."""
        result = ProductQueryPipeline.sort(_catalog(), SortKey.PRICE_DESC)
        prices = [p.price or 0.0 for p in result]
        self.assertEqual(prices, sorted(prices, reverse=True))

    def test_price_ties_keep_input_order(self) -> None:
        """Equal prices keep their relative order in both directions."""
        for key in (SortKey.PRICE_ASC, SortKey.PRICE_DESC):
            with self.subTest(key=key):
                ids = _ids(ProductQueryPipeline.sort(_catalog(), key))
                self.assertLess(ids.index(10), ids.index(11))
                self.assertLess(ids.index(14), ids.index(15))

    def test_name_ties_keep_input_order(self) -> None:
        """Identical titles keep their relative order."""
        products = [
            _make_product(2, "Mug"),
            _make_product(1, "mug"),
            _make_product(3, "MUG"),
        ]
        result = ProductQueryPipeline.sort(products, SortKey.NAME_ASC)
        self.assertEqual(_ids(result), [2, 1, 3])

    def test_missing_price_sorts_as_zero(self) -> None:
        """A product without price sorts as free."""
        result = ProductQueryPipeline.sort(_catalog(), SortKey.PRICE_ASC)
        self.assertEqual(result[0].id, 16)

    def test_sort_does_not_mutate_input(self) -> None:
        """The input list keeps its order."""
        products = _catalog()
        before = list(products)
        ProductQueryPipeline.sort(products, SortKey.PRICE_DESC)
        self.assertEqual(products, before)


class TestProject(unittest.TestCase):
    """Whole-pipeline properties."""

    def test_deterministic(self) -> None:
        """Two calls with the same inputs give the same output."""
        query = QueryDescriptor(search_text="a", sort_key=SortKey.PRICE_ASC)
        self.assertEqual(
            project(_catalog(), query), project(_catalog(), query)
        )

    def test_default_query_preserves_ids(self) -> None:
        """'all' + empty search keeps every id exactly once."""
        raw = _catalog()
        result = project(raw, QueryDescriptor())
        self.assertEqual(len(result), len(raw))
        self.assertEqual(set(_ids(result)), set(_ids(raw)))

    def test_returns_new_list(self) -> None:
        """The output never shares storage with the input."""
        raw = _catalog()
        result = project(raw, QueryDescriptor())
        self.assertIsNot(result, raw)
        result.clear()
        self.assertEqual(len(raw), 8)

    def test_combined_stages(self) -> None:
        """Category, search and sort compose."""
        query = QueryDescriptor(
            category="home", search_text="lamp", sort_key=SortKey.NAME_ASC
        )
        self.assertEqual(_ids(project(_catalog(), query)), [15, 14])

    def test_empty_collection(self) -> None:
        """No products in, no products out."""
        self.assertEqual(project([], QueryDescriptor(search_text="x")), [])

    def test_malformed_products_do_not_raise(self) -> None:
        """Non-numeric prices and missing titles are tolerated."""
        products = [
            Product(id=1, title=None, price=float("nan")),
            Product(id=2, title="B", price=None),
            Product(id=3, title="A", price=float("inf")),
        ]
        for key in SortKey:
            with self.subTest(key=key):
                result = project(
                    products, QueryDescriptor(search_text="", sort_key=key)
                )
                self.assertEqual(len(result), 3)


if __name__ == "__main__":
    unittest.main()
