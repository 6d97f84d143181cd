# src/services/product_list.py

"""List-screen state: fetch the catalog once, re-project on every query change."""

import asyncio
import logging
from collections.abc import Callable

from src.api.client import CatalogClient
from src.config.settings import Settings
from src.core.lifecycle import RequestLifecycle
from src.core.pipeline import ProductQueryPipeline
from src.models.product import Product
from src.models.query import QueryDescriptor, SortKey
from src.models.request_state import ErrorInfo, RequestState

logger = logging.getLogger("catalog_browser.services")

Listener = Callable[[], None]


class ProductListController:
    """Owns the list fetch, the ``QueryDescriptor`` and the projection.

    The raw collection is fetched once per ``load``.  Search, category
    and sort changes only replace the descriptor; ``items`` is then
    recomputed from the resident collection without any network call.
    """

    def __init__(
        self,
        client: CatalogClient | None = None,
        pipeline: ProductQueryPipeline | None = None,
    ) -> None:
        self._owns_client = client is None
        self.client = client or CatalogClient()
        self.pipeline = pipeline or ProductQueryPipeline()
        self.query = QueryDescriptor()
        self._lifecycle: RequestLifecycle[list[Product]] = (
            RequestLifecycle()
        )
        self._listeners: list[Listener] = []
        self._projection: tuple[
            list[Product] | None, QueryDescriptor, list[Product]
        ] | None = None
        self._lifecycle.subscribe(self._on_state)

    # ── Fetch ────────────────────────────────────────────

    async def _fetch(self) -> list[Product]:
        products: list[Product] = await asyncio.to_thread(
            self.client.fetch_products
        )
        return products

    def load(self) -> asyncio.Task[None]:
        """Fetch the raw collection; returns the driving task."""
        logger.debug("Loading product list")
        return self._lifecycle.start(None, self._fetch)

    def retry(self) -> asyncio.Task[None]:
        """Re-run the list fetch after a failure."""
        return self.load()

    def dispose(self) -> None:
        """Cancel any in-flight fetch and stop notifying listeners.

        A client created by the controller itself is closed too; an
        injected client stays open for its owner.
        """
        logger.debug("Disposing product list controller")
        self._lifecycle.dispose()
        self._listeners.clear()
        if self._owns_client:
            self.client.close()

    # ── State ────────────────────────────────────────────

    @property
    def state(self) -> RequestState[list[Product]]:
        return self._lifecycle.state

    @property
    def products(self) -> list[Product]:
        """The raw fetched collection (empty until loaded)."""
        return self.state.data or []

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error(self) -> ErrorInfo | None:
        return self.state.error

    @property
    def items(self) -> list[Product]:
        """The projected view, memoised on collection and query."""
        raw = self.state.data
        cached = self._projection
        if cached is not None and cached[0] is raw and cached[1] == self.query:
            return list(cached[2])
        projected = self.pipeline.project(raw or [], self.query)
        self._projection = (raw, self.query, projected)
        return list(projected)

    @property
    def available_categories(self) -> list[str]:
        """``"all"`` followed by the sorted categories in the collection."""
        found = {
            p.category for p in self.products if isinstance(p.category, str)
        }
        return [Settings.ALL_CATEGORIES, *sorted(found)]

    # ── Query descriptor ─────────────────────────────────

    def set_search_text(self, search_text: str) -> None:
        self._set_query(self.query.with_search_text(search_text))

    def set_category(self, category: str) -> None:
        self._set_query(self.query.with_category(category))

    def set_sort_key(self, sort_key: SortKey | str) -> None:
        """Change the sort order; unknown keys raise ``ValueError``."""
        self._set_query(self.query.with_sort_key(sort_key))

    def _set_query(self, query: QueryDescriptor) -> None:
        if query == self.query:
            return
        self.query = query
        self._notify()

    # ── Listeners ────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state or query change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_state(self, state: RequestState[list[Product]]) -> None:
        if state.error is not None:
            logger.info("Product list failed: %s", state.error.detail)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
