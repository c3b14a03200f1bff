from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy.orm import Session

from bizdesk.config import settings
from bizdesk.core.exceptions import NotFoundException, not_found_message
from bizdesk.core.isolation import require_context
from bizdesk.models.purchase import CENTS, normalize_product
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.purchase_repository import PurchaseRepository
from bizdesk.repositories.sale_repository import SaleRepository
from bizdesk.schemas.stock_schemas import StockItem, StockStatus


def stock_status(available: int, low_threshold: int) -> StockStatus:
    if available < 0:
        return StockStatus.NEGATIVE
    if available == 0:
        return StockStatus.OUT_OF_STOCK
    if available < low_threshold:
        return StockStatus.LOW
    return StockStatus.IN_STOCK


def _average_price(prices: list[Decimal]) -> Decimal:
    if not prices:
        return Decimal("0.00")
    return (sum(prices, Decimal("0")) / len(prices)).quantize(CENTS, rounding=ROUND_HALF_UP)


class StockService:
    """
    Derives stock levels from a tenant's purchases and sales.

    Stock is never stored: a product's available quantity is everything
    purchased minus everything sold, matched on the stored product key
    (the trimmed, lowercased name). Both sides are read through the scoped
    repositories so a tenant's stock only ever reflects its own records.
    """

    def __init__(self, db: Session, low_stock_threshold: int | None = None):
        self.db = db
        self.purchase_repo = PurchaseRepository(db)
        self.sale_repo = SaleRepository(db)
        self.low_stock_threshold = (
            low_stock_threshold if low_stock_threshold is not None else settings.LOW_STOCK_THRESHOLD
        )

    def list_stock(self, context: TenantContext) -> list[StockItem]:
        """All purchased products, lowest available quantity first"""
        context = require_context(context, "read stock")

        purchases = defaultdict(list)
        for purchase in self.purchase_repo.get_all(context):
            purchases[purchase.product_key].append(purchase)

        sales = defaultdict(list)
        for sale in self.sale_repo.get_all(context):
            sales[sale.product_key].append(sale)

        items = [
            self._build_item(product, product_purchases, sales.get(product, []))
            for product, product_purchases in purchases.items()
        ]
        items.sort(key=lambda item: (item.available, item.product_name))
        return items

    def get_product_stock(self, product_name: str, context: TenantContext) -> StockItem:
        """
        Stock of a single product.

        Raises:
            NotFoundException: If the product was never purchased nor sold
        """
        context = require_context(context, "read stock")
        purchases = self.purchase_repo.get_by_product(product_name, context)
        sales = self.sale_repo.get_by_product(product_name, context)
        if not purchases and not sales:
            raise NotFoundException(not_found_message("Product", product_name.strip()))
        return self._build_item(normalize_product(product_name), purchases, sales)

    def out_of_stock(self, context: TenantContext) -> list[StockItem]:
        return [item for item in self.list_stock(context) if item.available <= 0]

    def low_stock(self, context: TenantContext) -> list[StockItem]:
        return [
            item
            for item in self.list_stock(context)
            if 0 < item.available < self.low_stock_threshold
        ]

    def total_value(self, context: TenantContext) -> Decimal:
        """Sum of every product's stock value at average purchase price"""
        return sum(
            (Decimal(str(item.stock_value)) for item in self.list_stock(context)),
            Decimal("0.00"),
        ).quantize(CENTS, rounding=ROUND_HALF_UP)

    def available_quantity(self, product_name: str, context: TenantContext) -> int:
        """Available quantity of a product, 0 if it has no history"""
        context = require_context(context, "read stock")
        purchased = sum(p.quantity for p in self.purchase_repo.get_by_product(product_name, context))
        sold = sum(s.quantity for s in self.sale_repo.get_by_product(product_name, context))
        return purchased - sold

    def has_sufficient_stock(self, product_name: str, quantity: int, context: TenantContext) -> bool:
        return self.available_quantity(product_name, context) >= quantity

    def _build_item(self, product: str, purchases: Iterable, sales: Iterable) -> StockItem:
        purchases = list(purchases)
        sales = list(sales)
        purchased = sum(p.quantity for p in purchases)
        sold = sum(s.quantity for s in sales)
        available = purchased - sold

        avg_purchase = _average_price([Decimal(p.unit_price) for p in purchases])
        avg_sale = _average_price([Decimal(s.unit_price) for s in sales])

        return StockItem(
            product_name=product,
            quantity_purchased=purchased,
            quantity_sold=sold,
            available=available,
            average_purchase_price=float(avg_purchase),
            average_sale_price=float(avg_sale),
            stock_value=float(avg_purchase * available),
            unit_margin=float(avg_sale - avg_purchase),
            status=stock_status(available, self.low_stock_threshold),
        )
