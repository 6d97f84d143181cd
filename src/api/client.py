# src/api/client.py

"""HTTP client for the public product catalog API."""

import logging
import urllib.parse
from typing import Any

from curl_cffi import requests as curl_requests

from src.api.decoder import ProductDecoder
from src.api.errors import (
    DecodeError,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("catalog_browser.api")

# Max characters of a bad body copied into the log
_BODY_EXCERPT = 200


class CatalogClient:
    """Unauthenticated GET client for the five catalog endpoints.

    Every method is blocking; async callers run them through
    ``asyncio.to_thread``.  Failures surface as ``CatalogError``
    subclasses, logged here with the operation name and key.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    # ── Transport ────────────────────────────────────────

    def _get_json(
        self,
        operation: str,
        path: str,
        key: object = None,
        params: dict[str, Any] | None = None,
        not_found_message: str | None = None,
    ) -> Any:
        """GET ``path`` and return the parsed JSON body.

        A 404 becomes ``NotFoundError`` only when *not_found_message*
        is given; every other non-2xx status is an ``HttpStatusError``.
        """
        url = f"{self.base_url}{path}"
        logger.debug("[%s] GET %s (key=%r)", operation, url, key)
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                params=params,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            logger.warning(
                "[%s] Request error (key=%r): %s",
                operation,
                key,
                exc,
                exc_info=True,
            )
            raise NetworkError(str(exc)) from exc

        status = resp.status_code
        if status == 404 and not_found_message is not None:
            logger.info("[%s] Not found (key=%r)", operation, key)
            raise NotFoundError(not_found_message)
        if not 200 <= status < 300:
            logger.warning(
                "[%s] HTTP %d (key=%r)", operation, status, key
            )
            msg = f"HTTP error! status: {status}"
            raise HttpStatusError(status, msg)

        try:
            return resp.json()
        except ValueError as exc:
            logger.error(
                "[%s] Invalid JSON body (key=%r): %r",
                operation,
                key,
                resp.text[:_BODY_EXCERPT],
                exc_info=True,
            )
            raise DecodeError(f"Invalid JSON body: {exc}") from exc

    def _decode(
        self, operation: str, key: object, decode: Any, payload: Any,
    ) -> Any:
        """Run a decoder, logging shape mismatches as defects."""
        try:
            return decode(payload)
        except DecodeError as exc:
            logger.error(
                "[%s] Unexpected response shape (key=%r): %s",
                operation,
                key,
                exc,
            )
            raise

    @staticmethod
    def _require_text(value: str | None, message: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(message)
        return value

    # ── Endpoints ────────────────────────────────────────

    def fetch_products(self) -> list[Product]:
        """Fetch one page of ``PRODUCT_LIST_LIMIT`` products."""
        payload = self._get_json(
            "fetch_products",
            "/products",
            params={"limit": self.settings.PRODUCT_LIST_LIMIT},
        )
        products: list[Product] = self._decode(
            "fetch_products", None,
            ProductDecoder.decode_envelope, payload,
        )
        logger.info("Fetched %d products", len(products))
        return products

    def search_products(self, query: str) -> list[Product]:
        """Server-side title/description search."""
        query = self._require_text(
            query, "Search query cannot be empty"
        )
        payload = self._get_json(
            "search_products",
            "/products/search",
            key=query,
            params={"q": query},
        )
        products: list[Product] = self._decode(
            "search_products", query,
            ProductDecoder.decode_envelope, payload,
        )
        return products

    def fetch_products_by_category(self, category: str) -> list[Product]:
        """Products pre-filtered by category on the server."""
        category = self._require_text(
            category, "Category cannot be empty"
        )
        encoded = urllib.parse.quote(category, safe="")
        payload = self._get_json(
            "fetch_products_by_category",
            f"/products/category/{encoded}",
            key=category,
        )
        products: list[Product] = self._decode(
            "fetch_products_by_category", category,
            ProductDecoder.decode_envelope, payload,
        )
        return products

    def fetch_categories(self) -> list[str]:
        """List the category names known to the API."""
        payload = self._get_json(
            "fetch_categories", "/products/categories"
        )
        categories: list[str] = self._decode(
            "fetch_categories", None,
            ProductDecoder.decode_categories, payload,
        )
        return categories

    def fetch_product_by_id(self, product_id: int | str | None) -> Product:
        """Fetch a single product; a 404 raises ``NotFoundError``."""
        if product_id is None or (
            isinstance(product_id, str) and not product_id.strip()
        ):
            raise ValidationError(
                "Product ID is required and cannot be empty"
            )
        encoded = urllib.parse.quote(str(product_id).strip(), safe="")
        payload = self._get_json(
            "fetch_product_by_id",
            f"/products/{encoded}",
            key=product_id,
            not_found_message=f"Product with ID {product_id} not found",
        )
        product: Product = self._decode(
            "fetch_product_by_id", product_id,
            ProductDecoder.decode_product, payload,
        )
        return product
