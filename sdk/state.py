# sdk/state.py
"""Client-side inventory state and the reducer that drives it.

``reduce(state, event)`` is pure: it never touches the network and always
returns a new ``InventoryState``. Filtering and category derivation are
recomputed from ``products`` so they cannot drift from the last fetch.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

FORM_FIELDS = ("product_name", "description", "price", "quantity", "category")


class ProductForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_name: str = ""
    description: str = ""
    price: str = ""
    quantity: str = ""
    category: str = ""

    def is_empty(self) -> bool:
        return not any(getattr(self, f) for f in FORM_FIELDS)

    def payload(self) -> Dict[str, str]:
        return {f: getattr(self, f) for f in FORM_FIELDS}


class InventoryState(BaseModel):
    model_config = ConfigDict(frozen=True)

    products: List[Dict[str, Any]] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    search_term: str = ""
    category_filter: str = ""
    editing_id: Optional[int] = None
    form: ProductForm = Field(default_factory=ProductForm)
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def filtered_products(self) -> List[Dict[str, Any]]:
        return filter_products(self.products, self.search_term, self.category_filter)

    @property
    def mode(self) -> str:
        if self.editing_id is not None:
            return "editing"
        return "idle" if self.form.is_empty() else "adding"

    def first_error(self, field: str) -> Optional[str]:
        messages = self.errors.get(field)
        return messages[0] if messages else None


# ---------------------------
# Events
# ---------------------------
class ProductsLoaded(BaseModel):
    products: List[Dict[str, Any]]


class SearchChanged(BaseModel):
    term: str


class CategoryChanged(BaseModel):
    category: str


class FieldChanged(BaseModel):
    name: str
    value: str


class EditStarted(BaseModel):
    product: Dict[str, Any]


class EditCancelled(BaseModel):
    pass


class SubmitSucceeded(BaseModel):
    pass


class SubmitFailed(BaseModel):
    errors: Dict[str, List[str]]


Event = Union[
    ProductsLoaded, SearchChanged, CategoryChanged, FieldChanged,
    EditStarted, EditCancelled, SubmitSucceeded, SubmitFailed,
]


# ---------------------------
# Pure helpers
# ---------------------------
def filter_products(products: Sequence[Dict[str, Any]], search_term: str = "", category_filter: str = "") -> List[Dict[str, Any]]:
    term = search_term.lower()
    out = []
    for p in products:
        if term and term not in (p.get("product_name") or "").lower():
            continue
        if category_filter and p.get("category") != category_filter:
            continue
        out.append(p)
    return out


def derive_categories(products: Sequence[Dict[str, Any]]) -> List[str]:
    seen: Dict[str, None] = {}
    for p in products:
        category = p.get("category")
        if category:
            seen.setdefault(category, None)
    return list(seen)


def format_price(value: Any, symbol: str = "₱") -> str:
    """Display form of a price: symbol, thousands separators, two decimals.

    Works on the Decimal itself, so the stored string is never rounded
    through a float. Unparseable values are shown as-is.
    """
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return str(value)
    if not amount.is_finite():
        return str(value)
    return f"{symbol}{amount:,.2f}"


def _form_from_product(product: Dict[str, Any]) -> ProductForm:
    def text(key: str) -> str:
        value = product.get(key)
        return "" if value is None else str(value)

    return ProductForm(**{f: text(f) for f in FORM_FIELDS})


# ---------------------------
# Reducer
# ---------------------------
def reduce(state: InventoryState, event: Event) -> InventoryState:
    if isinstance(event, ProductsLoaded):
        products = list(event.products)
        return state.model_copy(update={"products": products, "categories": derive_categories(products)})

    if isinstance(event, SearchChanged):
        return state.model_copy(update={"search_term": event.term})

    if isinstance(event, CategoryChanged):
        return state.model_copy(update={"category_filter": event.category})

    if isinstance(event, FieldChanged):
        if event.name not in FORM_FIELDS:
            raise ValueError(f"unknown form field: {event.name}")
        form = state.form.model_copy(update={event.name: event.value})
        return state.model_copy(update={"form": form})

    if isinstance(event, EditStarted):
        return state.model_copy(update={
            "editing_id": event.product["id"],
            "form": _form_from_product(event.product),
            "errors": {},
        })

    if isinstance(event, (EditCancelled, SubmitSucceeded)):
        return state.model_copy(update={"editing_id": None, "form": ProductForm(), "errors": {}})

    if isinstance(event, SubmitFailed):
        return state.model_copy(update={"errors": dict(event.errors)})

    raise TypeError(f"unhandled event: {type(event).__name__}")
