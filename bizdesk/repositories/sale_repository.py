from datetime import date
from decimal import Decimal

from sqlalchemy import func

from bizdesk.core.isolation import tenant_criteria
from bizdesk.models.purchase import normalize_product
from bizdesk.models.sale import Sale
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.scoped_repository import TenantScopedRepository


class SaleRepository(TenantScopedRepository[Sale]):
    """Repository for Sale data access"""

    model = Sale

    def get_all(self, context: TenantContext) -> list[Sale]:
        """Newest first"""
        return self.query(context).order_by(Sale.sale_date.desc(), Sale.id.desc()).all()

    def get_by_period(self, start: date, end: date, context: TenantContext) -> list[Sale]:
        return (
            self.query(context)
            .filter(Sale.sale_date >= start, Sale.sale_date <= end)
            .order_by(Sale.sale_date.desc(), Sale.id.desc())
            .all()
        )

    def get_by_product(self, product_name: str, context: TenantContext) -> list[Sale]:
        return (
            self.query(context)
            .filter(Sale.product_key == normalize_product(product_name))
            .all()
        )

    def total_for_period(self, start: date, end: date, context: TenantContext) -> Decimal:
        result = (
            self.db.query(func.sum(Sale.total_price))
            .filter(
                tenant_criteria(Sale, context),
                Sale.sale_date >= start,
                Sale.sale_date <= end,
            )
            .scalar()
        )
        return Decimal(result) if result is not None else Decimal("0.00")
