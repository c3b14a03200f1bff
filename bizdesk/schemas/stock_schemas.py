from enum import Enum as PyEnum
from pydantic import BaseModel


class StockStatus(str, PyEnum):
    NEGATIVE = "negative"
    OUT_OF_STOCK = "out_of_stock"
    LOW = "low"
    IN_STOCK = "in_stock"


class StockItem(BaseModel):
    """Stock level of one product, derived from purchases and sales"""

    product_name: str
    quantity_purchased: int
    quantity_sold: int
    available: int
    average_purchase_price: float
    average_sale_price: float
    stock_value: float
    unit_margin: float
    status: StockStatus


class StockListResponse(BaseModel):
    items: list[StockItem]
    total: int


class StockValueResponse(BaseModel):
    total_value: float


class StockCheckResponse(BaseModel):
    product_name: str
    requested: int
    available: int
    sufficient: bool
