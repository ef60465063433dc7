# tests/test_controller.py
from unittest import mock

import requests
from fastapi.testclient import TestClient

from app.main import app
from app.database import reset_store
from sdk.controller import InventoryController
from sdk.pyinventory import InventoryClient, NotFoundError, TransportError

RICE = {"product_name": "Rice 5kg", "price": "250.00", "quantity": "10", "category": "Grains"}


def make_controller():
    reset_store()
    client = InventoryClient(base_url="http://testserver", session=TestClient(app))
    ctl = InventoryController(client)
    assert ctl.load()
    return ctl


def fill(ctl, fields):
    for name, value in fields.items():
        ctl.set_field(name, value)


def test_add_product_reloads_list_and_categories():
    ctl = make_controller()
    fill(ctl, RICE)
    assert ctl.state.mode == "adding"
    assert ctl.submit()
    assert ctl.state.mode == "idle"
    assert [p["product_name"] for p in ctl.state.products] == ["Rice 5kg"]
    assert ctl.state.categories == ["Grains"]


def test_validation_errors_stay_on_form():
    ctl = make_controller()
    fill(ctl, {**RICE, "product_name": ""})
    assert not ctl.submit()
    assert ctl.state.first_error("product_name") == "The product name field is required."
    assert ctl.state.form.price == "250.00"
    assert ctl.state.products == []


def test_edit_then_submit_updates_in_place():
    ctl = make_controller()
    fill(ctl, RICE)
    ctl.submit()
    pid = ctl.state.products[0]["id"]

    assert ctl.start_edit(pid)
    assert ctl.state.form.quantity == "10"
    ctl.set_field("quantity", "12")
    assert ctl.submit()
    assert ctl.state.editing_id is None
    assert len(ctl.state.products) == 1
    assert ctl.state.products[0]["quantity"] == 12


def test_start_edit_unknown_id():
    ctl = make_controller()
    assert not ctl.start_edit(99)
    assert ctl.state.mode == "idle"


def test_update_of_vanished_product_reloads_and_keeps_form():
    ctl = make_controller()
    fill(ctl, RICE)
    ctl.submit()
    pid = ctl.state.products[0]["id"]
    ctl.start_edit(pid)
    ctl.client.delete_product(pid)

    assert not ctl.submit()
    assert ctl.state.products == []
    assert ctl.state.editing_id == pid


def test_delete_requires_confirmation():
    ctl = make_controller()
    fill(ctl, RICE)
    ctl.submit()
    pid = ctl.state.products[0]["id"]

    assert not ctl.delete(pid, lambda: False)
    assert len(ctl.state.products) == 1

    assert ctl.delete(pid, lambda: True)
    assert ctl.state.products == []
    # second delete is stale
    assert not ctl.delete(pid, lambda: True)


def test_transport_failure_on_load_keeps_previous_list():
    ctl = make_controller()
    fill(ctl, RICE)
    ctl.submit()
    before = ctl.state

    ctl.client.session = mock.Mock()
    ctl.client.session.get.side_effect = requests.Timeout("slow")
    assert not ctl.load()
    assert ctl.state is before


def test_transport_failure_on_submit_keeps_form():
    client = mock.Mock(spec=InventoryClient)
    client.create_product.side_effect = TransportError("down")
    ctl = InventoryController(client)
    fill(ctl, RICE)
    assert not ctl.submit()
    assert ctl.state.form.product_name == "Rice 5kg"
    client.list_products.assert_not_called()


def test_filters_do_not_hit_the_network():
    client = mock.Mock(spec=InventoryClient)
    client.list_products.return_value = [{"id": 1, "product_name": "Rice", "category": "Grains", "price": "1.00", "quantity": 1}]
    ctl = InventoryController(client)
    ctl.load()
    ctl.set_search("ric")
    ctl.set_category("Grains")
    assert [p["id"] for p in ctl.state.filtered_products] == [1]
    assert client.list_products.call_count == 1


def test_missing_products_endpoint_does_not_crash_load():
    ctl = make_controller()
    fill(ctl, RICE)
    ctl.submit()
    before = ctl.state

    ctl.client.session = mock.Mock()
    ctl.client.session.get.return_value = mock.Mock(status_code=404, text="Not Found")
    assert not ctl.load()
    assert ctl.state is before


def test_non_json_listing_does_not_crash_load():
    ctl = make_controller()
    before = ctl.state

    page = mock.Mock(status_code=200, text="<html>gateway</html>")
    page.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>gateway</html>", 0)
    ctl.client.session = mock.Mock()
    ctl.client.session.get.return_value = page
    assert not ctl.load()
    assert ctl.state is before


def test_stale_delete_with_unreachable_listing_returns_control():
    client = mock.Mock(spec=InventoryClient)
    client.delete_product.side_effect = NotFoundError(7)
    client.list_products.side_effect = TransportError("HTTP 404: products endpoint not found")
    ctl = InventoryController(client)
    assert not ctl.delete(7, lambda: True)
    assert ctl.state.products == []
