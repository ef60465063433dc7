# app/models.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_serializer


class Product(BaseModel):
    id: int
    product_name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
    category: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @field_serializer("price")
    def _serialize_price(self, price: Decimal) -> str:
        return f"{price:.2f}"

    def to_public(self) -> dict:
        # deleted_at is store-internal; active records never carry it over the wire
        return self.model_dump(mode="json", exclude={"deleted_at"})
