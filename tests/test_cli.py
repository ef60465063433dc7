# tests/test_cli.py
from rich.console import Console

import cli
from sdk.state import InventoryState, ProductsLoaded, EditStarted, SubmitFailed, CategoryChanged, reduce

PRODUCTS = [
    {"id": 1, "product_name": "Rice 5kg", "description": None, "price": "250.00", "quantity": 10, "category": "Grains"},
    {"id": 2, "product_name": "Sugar 1kg", "description": None, "price": "1250.00", "quantity": 3, "category": None},
]


def text_of(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


def test_table_shows_formatted_prices_and_placeholder_category():
    state = reduce(InventoryState(), ProductsLoaded(products=PRODUCTS))
    out = text_of(cli.products_table(state))
    assert "Products (2)" in out
    assert "₱250.00" in out
    assert "₱1,250.00" in out
    assert "Grains" in out
    assert " - " in out


def test_table_without_matches():
    state = reduce(InventoryState(), ProductsLoaded(products=PRODUCTS))
    state = reduce(state, CategoryChanged(category="Frozen"))
    out = text_of(cli.products_table(state))
    assert "Products (0)" in out
    assert "No products found" in out


def test_form_panel_titles_and_errors():
    state = InventoryState()
    assert "Add New Product" in text_of(cli.form_panel(state))

    state = reduce(state, EditStarted(product=PRODUCTS[0]))
    state = reduce(state, SubmitFailed(errors={"price": ["The price field must be a number.", "second"]}))
    out = text_of(cli.form_panel(state))
    assert "Edit Product" in out
    assert "The price field must be a number." in out
    assert "second" not in out
