# app/models.py
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, confloat
from typing import Optional, Dict, List, Union

Number = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")


# ---------------------------
# Request bodies
# ---------------------------
class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: StrictStr
    description: StrictStr
    price: Number
    category: StrictStr
    in_stock: StrictBool = Field(alias="inStock")


class ProductUpdate(BaseModel):
    """Partial update. Only fields present in ``model_fields_set`` and not
    null are applied; ``False`` and ``0`` are real values."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[StrictStr] = Field(None, min_length=1)
    description: Optional[StrictStr] = None
    price: Optional[Number] = None
    category: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(None, alias="inStock")

    def changes(self) -> Dict[str, object]:
        return {
            field: getattr(self, field)
            for field in self.model_fields_set
            if getattr(self, field) is not None
        }


# ---------------------------
# Responses
# ---------------------------
class ProductPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(alias="totalProducts")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    products: List[Product]


class DeleteResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    # always a one-element list
    deleted_product: List[Product] = Field(alias="deletedProduct")


class ProductStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(alias="totalProducts")
    count_by_category: Dict[str, int] = Field(alias="countByCategory")


class Message(BaseModel):
    message: str
