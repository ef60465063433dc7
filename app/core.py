from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Dict

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

PRICE_QUANTUM = Decimal("0.01")

FILLABLE_FIELDS = ("product_name", "description", "price", "quantity", "category")


def quantize_price(value: Any) -> Decimal:
    """Coerce a JSON number or numeric string to a 2-place Decimal.

    Floats go through ``str`` first so the decimal digits the client sent are
    kept instead of the binary approximation. Extra digits round half-up.
    """
    if isinstance(value, bool):
        raise PydanticCustomError("decimal_type", "Price must be a number")
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise PydanticCustomError("decimal_parsing", "Price must be a number")
    if not price.is_finite():
        raise PydanticCustomError("decimal_parsing", "Price must be a finite number")
    try:
        return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold at 2 places
        raise PydanticCustomError("decimal_max_digits", "Price is too large")


def _require(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", "Field required")
    return value


class ProductIn(BaseModel):
    product_name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
    category: Optional[str] = None

    @field_validator("product_name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> Any:
        value = _require(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Decimal:
        return quantize_price(_require(value))

    @field_validator("quantity", mode="before")
    @classmethod
    def _check_quantity(cls, value: Any) -> Any:
        value = _require(value)
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Quantity must be an integer")
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", "category", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _make_product_dict(p: ProductIn) -> Dict[str, Any]:
    return {field: getattr(p, field) for field in FILLABLE_FIELDS}
