# src/cli/runner.py

"""Headless CLI host driving the list and detail controllers."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.api.client import CatalogClient
from src.core.pipeline import ProductQueryPipeline
from src.models.product import Product, StockStatus
from src.models.request_state import ErrorInfo
from src.services.product_detail import ProductDetailController
from src.services.product_list import ProductListController

logger = logging.getLogger("catalog_browser.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2

_STOCK_LABELS: dict[StockStatus, str] = {
    StockStatus.OUT_OF_STOCK: "[bold red]Out of Stock[/bold red]",
    StockStatus.LOW_STOCK: "[yellow]{stock} available[/yellow]",
    StockStatus.IN_STOCK: "{stock} available",
}


def _product_to_dict(product: Product) -> dict[str, object]:
    """Serialise a product to a plain dict for JSON output."""
    data = asdict(product)
    data["images"] = list(product.images)
    status = product.stock_status
    data["stock_status"] = status.value if status else None
    return data


def _format_price(price: float | None) -> str:
    return f"${price:,.2f}" if price is not None else "N/A"


def _format_rating(rating: float | None) -> str:
    return f"⭐ {rating:.1f}" if rating is not None else "—"


def _print_error(error: ErrorInfo) -> None:
    _err.print(f"[red]Error: {escape(error.message)}[/red]")
    _err.print("[dim]See the run log for details.[/dim]")


def _print_list_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", max_width=50)
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")

    for p in products:
        table.add_row(
            str(p.id),
            escape((p.title or "N/A")[:50]),
            escape(p.category or "—"),
            _format_price(p.price),
            _format_rating(p.rating),
        )

    Console().print(table)


def _print_detail_table(product: Product) -> None:
    """Render one product's detail view to stdout."""
    table = Table(
        title=escape(product.title or f"Product {product.id}"),
        show_header=False,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    status = product.stock_status
    stock = (
        _STOCK_LABELS[status].format(stock=product.stock)
        if status is not None
        else "—"
    )
    rows: list[tuple[str, str | None]] = [
        ("Brand", product.brand),
        ("Category", product.category),
        ("Price", _format_price(product.price)),
        ("Rating", _format_rating(product.rating)),
        ("Stock", stock),
        ("Description", product.description),
        ("Warranty", product.warranty_information),
        ("Shipping", product.shipping_information),
        ("Returns", product.return_policy),
        (
            "Minimum order",
            f"{product.minimum_order_quantity} units"
            if product.minimum_order_quantity
            else None,
        ),
    ]
    for label, value in rows:
        if value:
            table.add_row(label, value if label == "Stock" else escape(value))

    Console().print(table)


def _emit_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


async def cli_list(
    search_text: str | None,
    category: str | None,
    sort_key: str,
    search_description: bool,
    output_format: str,
) -> int:
    """Fetch the catalog once and print its projection."""
    controller = ProductListController(
        pipeline=ProductQueryPipeline(search_description),
    )
    try:
        controller.set_search_text(search_text or "")
        controller.set_category(category or "")
        controller.set_sort_key(sort_key)

        _err.print("[bold]Loading products...[/bold]")
        await controller.load()

        if controller.error is not None:
            _print_error(controller.error)
            return EXIT_ERROR

        items = controller.items
        logger.info(
            "Listed %d of %d products (%s)",
            len(items),
            len(controller.products),
            controller.query,
        )
        _err.print(
            f"[green]✓ {len(items)} of {len(controller.products)}"
            " products[/green]"
        )
        if output_format == "table":
            _print_list_table(items)
        else:
            _emit_json([_product_to_dict(p) for p in items])
        return EXIT_OK
    finally:
        controller.dispose()


async def cli_show(product_id: str, output_format: str) -> int:
    """Print one product; exit code 2 when the API reports 404."""
    controller = ProductDetailController()
    try:
        await controller.show(product_id)

        if controller.is_not_found:
            _err.print(f"[yellow]Product {escape(product_id)} not found.[/yellow]")
            return EXIT_NOT_FOUND
        if controller.error is not None:
            _print_error(controller.error)
            return EXIT_ERROR

        product = controller.product
        if product is None:
            return EXIT_ERROR
        if output_format == "table":
            _print_detail_table(product)
        else:
            _emit_json(_product_to_dict(product))
        return EXIT_OK
    finally:
        controller.dispose()


async def cli_categories() -> int:
    """Print the category names known to the API."""
    client = CatalogClient()
    try:
        categories = await asyncio.to_thread(client.fetch_categories)
    except Exception as exc:
        _print_error(ErrorInfo.from_exception(exc))
        return EXIT_ERROR
    finally:
        client.close()

    _emit_json(categories)
    return EXIT_OK
