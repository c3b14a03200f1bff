from datetime import date
from decimal import Decimal

from sqlalchemy import func

from bizdesk.core.isolation import tenant_criteria
from bizdesk.models.purchase import Purchase, normalize_product
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.scoped_repository import TenantScopedRepository


class PurchaseRepository(TenantScopedRepository[Purchase]):
    """Repository for Purchase data access"""

    model = Purchase

    def get_all(self, context: TenantContext) -> list[Purchase]:
        """Newest first"""
        return (
            self.query(context)
            .order_by(Purchase.purchase_date.desc(), Purchase.id.desc())
            .all()
        )

    def get_by_period(self, start: date, end: date, context: TenantContext) -> list[Purchase]:
        """Purchases with start <= purchase_date <= end"""
        return (
            self.query(context)
            .filter(Purchase.purchase_date >= start, Purchase.purchase_date <= end)
            .order_by(Purchase.purchase_date.desc(), Purchase.id.desc())
            .all()
        )

    def get_by_product(self, product_name: str, context: TenantContext) -> list[Purchase]:
        """Exact match on the normalized product key"""
        return (
            self.query(context)
            .filter(Purchase.product_key == normalize_product(product_name))
            .all()
        )

    def total_for_period(self, start: date, end: date, context: TenantContext) -> Decimal:
        result = (
            self.db.query(func.sum(Purchase.total_price))
            .filter(
                tenant_criteria(Purchase, context),
                Purchase.purchase_date >= start,
                Purchase.purchase_date <= end,
            )
            .scalar()
        )
        return Decimal(result) if result is not None else Decimal("0.00")
