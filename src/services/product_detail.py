# src/services/product_detail.py

"""Detail-screen state: one product fetched per id, superseded on id change."""

import asyncio
import logging
from collections.abc import Callable

from src.api.client import CatalogClient
from src.core.lifecycle import RequestLifecycle
from src.models.product import Product
from src.models.request_state import ErrorInfo, RequestState

logger = logging.getLogger("catalog_browser.services")

Listener = Callable[[], None]


class ProductDetailController:
    """Looks up a single product through its own ``RequestLifecycle``.

    Switching to another id cancels the previous lookup, so only the
    latest id's outcome is ever visible.  A 404 surfaces as an error
    whose kind is ``not_found``, distinct from network failures.
    """

    def __init__(self, client: CatalogClient | None = None) -> None:
        self._owns_client = client is None
        self.client = client or CatalogClient()
        self._lifecycle: RequestLifecycle[Product] = RequestLifecycle()
        self._listeners: list[Listener] = []
        self._lifecycle.subscribe(self._on_state)

    def show(self, product_id: int | str) -> asyncio.Task[None]:
        """Start (or restart) the lookup for *product_id*."""
        previous = self._lifecycle.key
        if self._lifecycle.in_flight:
            logger.debug(
                "Superseding lookup for product %r with %r",
                previous,
                product_id,
            )

        async def fetch() -> Product:
            product: Product = await asyncio.to_thread(
                self.client.fetch_product_by_id, product_id
            )
            return product

        return self._lifecycle.start(product_id, fetch)

    def retry(self) -> asyncio.Task[None]:
        """Re-run the lookup for the current id."""
        product_id = self._lifecycle.key
        if product_id is None:
            msg = "No product has been requested yet"
            raise RuntimeError(msg)
        return self.show(product_id)  # type: ignore[arg-type]

    def dispose(self) -> None:
        """Cancel the lookup; close the client only if created here."""
        logger.debug(
            "Disposing detail controller (product=%r)",
            self._lifecycle.key,
        )
        self._lifecycle.dispose()
        self._listeners.clear()
        if self._owns_client:
            self.client.close()

    @property
    def product_id(self) -> object:
        return self._lifecycle.key

    @property
    def state(self) -> RequestState[Product]:
        return self._lifecycle.state

    @property
    def product(self) -> Product | None:
        return self.state.data

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error(self) -> ErrorInfo | None:
        return self.state.error

    @property
    def is_not_found(self) -> bool:
        return self.error is not None and self.error.is_not_found

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_state(self, state: RequestState[Product]) -> None:
        if state.error is not None:
            logger.info(
                "Product %r lookup failed: %s",
                self._lifecycle.key,
                state.error.detail,
            )
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
