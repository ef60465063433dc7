# sdk/controller.py
import logging
from typing import Callable, Optional

from .pyinventory import InventoryClient, InventoryError, NotFoundError, TransportError, ValidationError
from .state import (
    InventoryState, Event, reduce,
    ProductsLoaded, SearchChanged, CategoryChanged, FieldChanged,
    EditStarted, EditCancelled, SubmitSucceeded, SubmitFailed,
)

logger = logging.getLogger(__name__)


class InventoryController:
    """Glue between the HTTP client and the reducer.

    Every mutation that succeeds is followed by a full ``load()``; local state
    is never patched from a create/update response. Failures are logged and
    leave the last good state in place.
    """

    def __init__(self, client: InventoryClient, state: Optional[InventoryState] = None):
        self.client = client
        self.state = state if state is not None else InventoryState()

    def dispatch(self, event: Event) -> InventoryState:
        self.state = reduce(self.state, event)
        return self.state

    def load(self) -> bool:
        try:
            products = self.client.list_products()
        except InventoryError as e:
            logger.error("could not load products: %s", e)
            return False
        self.dispatch(ProductsLoaded(products=products))
        return True

    # Filters
    def set_search(self, term: str) -> InventoryState:
        return self.dispatch(SearchChanged(term=term))

    def set_category(self, category: str) -> InventoryState:
        return self.dispatch(CategoryChanged(category=category))

    # Form
    def set_field(self, name: str, value: str) -> InventoryState:
        return self.dispatch(FieldChanged(name=name, value=value))

    def start_edit(self, product_id: int) -> bool:
        product = next((p for p in self.state.products if p.get("id") == product_id), None)
        if product is None:
            logger.warning("product %s is not in the loaded list", product_id)
            return False
        self.dispatch(EditStarted(product=product))
        return True

    def cancel_edit(self) -> InventoryState:
        return self.dispatch(EditCancelled())

    def submit(self) -> bool:
        editing_id = self.state.editing_id
        payload = self.state.form.payload()
        try:
            if editing_id is not None:
                self.client.update_product(editing_id, payload)
            else:
                self.client.create_product(payload)
        except ValidationError as e:
            self.dispatch(SubmitFailed(errors=e.errors))
            return False
        except NotFoundError:
            # edit target went away under us; refresh the list, keep the form
            logger.warning("product %s no longer exists, reloading", editing_id)
            self.load()
            return False
        except TransportError as e:
            logger.error("could not save product: %s", e)
            return False

        self.dispatch(SubmitSucceeded())
        self.load()
        return True

    def delete(self, product_id: int, confirm: Callable[[], bool]) -> bool:
        if not confirm():
            return False
        try:
            self.client.delete_product(product_id)
        except NotFoundError:
            logger.warning("product %s was already deleted, reloading", product_id)
            self.load()
            return False
        except TransportError as e:
            logger.error("could not delete product %s: %s", product_id, e)
            return False
        self.load()
        return True
