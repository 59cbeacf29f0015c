from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator

from cyclestore.schemas.common import Envelope


class ProductWrite(BaseModel):
    name: Optional[str] = None
    # Accepts numbers or numeric strings from HTML forms
    price: Optional[Union[float, str]] = None
    image_url: Optional[str] = None


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    image_url: Optional[str]
    owner_id: int
    owner_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("price", mode="before")
    @classmethod
    def _numeric_to_float(cls, v):
        # NUMERIC columns come back as Decimal
        return float(v)


class ProductResponse(Envelope):
    product: ProductOut


class ProductListResponse(Envelope):
    count: int
    products: List[ProductOut]
