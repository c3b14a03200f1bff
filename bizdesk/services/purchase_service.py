import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import NotFoundException, not_found_message
from bizdesk.core.isolation import require_context
from bizdesk.models.purchase import Purchase, line_total
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.purchase_repository import PurchaseRepository
from bizdesk.schemas.purchase_schemas import PurchaseCreate, PurchaseUpdate
from bizdesk.services.period import resolve_period

logger = logging.getLogger(__name__)


class PurchaseService:
    """Service layer for purchase business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PurchaseRepository(db)

    def create_purchase(self, data: PurchaseCreate, context: TenantContext) -> Purchase:
        """
        Record a purchase for the caller's tenant.

        The total price is computed from quantity and unit price and the
        purchase date defaults to today.

        Raises:
            NoTenantContextError: If called without a tenant context
        """
        context = require_context(context, "create Purchase")
        purchase = Purchase(
            product_name=data.product_name.strip(),
            quantity=data.quantity,
            unit_price=data.unit_price,
            total_price=line_total(data.quantity, data.unit_price),
            purchase_date=data.purchase_date or date.today(),
            supplier=data.supplier,
            user_id=context.acting_user_id,
        )
        purchase = self.repo.create(purchase, context)
        logger.info("Purchase %s recorded: %s x%s", purchase.id, purchase.product_name, purchase.quantity)
        return purchase

    def list_purchases(
        self,
        context: TenantContext,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Purchase]:
        """List the tenant's purchases, optionally restricted to a period"""
        if start_date is not None or end_date is not None:
            start, end = resolve_period(start_date, end_date)
            return self.repo.get_by_period(start, end, context)
        return self.repo.get_all(context)

    def get_purchase(self, purchase_id: int, context: TenantContext) -> Purchase:
        """
        Get purchase by ID.

        Raises:
            NotFoundException: If purchase doesn't exist or belongs to another tenant
        """
        purchase = self.repo.get_by_id(purchase_id, context)
        if not purchase:
            raise NotFoundException(not_found_message("Purchase", purchase_id))
        return purchase

    def update_purchase(
        self, purchase_id: int, data: PurchaseUpdate, context: TenantContext
    ) -> Purchase:
        """
        Update a purchase and recompute its total.

        Raises:
            NotFoundException: If purchase doesn't exist
            CrossTenantAccessError: If purchase belongs to another tenant
        """
        purchase = self.repo.get_for_write(purchase_id, context)
        if not purchase:
            raise NotFoundException(not_found_message("Purchase", purchase_id))

        if data.product_name is not None:
            purchase.product_name = data.product_name.strip()
        if data.quantity is not None:
            purchase.quantity = data.quantity
        if data.unit_price is not None:
            purchase.unit_price = data.unit_price
        if data.purchase_date is not None:
            purchase.purchase_date = data.purchase_date
        if data.supplier is not None:
            purchase.supplier = data.supplier

        purchase.recalculate_total()
        return self.repo.update(purchase, context)

    def delete_purchase(self, purchase_id: int, context: TenantContext) -> None:
        """
        Delete a purchase.

        Raises:
            NotFoundException: If purchase doesn't exist
            CrossTenantAccessError: If purchase belongs to another tenant
        """
        purchase = self.repo.get_for_write(purchase_id, context)
        if not purchase:
            raise NotFoundException(not_found_message("Purchase", purchase_id))
        self.repo.delete(purchase, context)
        logger.info("Purchase %s deleted", purchase_id)

    def total_for_period(
        self, start_date: Optional[date], end_date: Optional[date], context: TenantContext
    ) -> tuple[date, date, Decimal]:
        start, end = resolve_period(start_date, end_date)
        return start, end, self.repo.total_for_period(start, end, context)
