import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import NotFoundException, ValidationException, not_found_message
from bizdesk.core.isolation import require_context
from bizdesk.models.purchase import line_total, normalize_product
from bizdesk.models.sale import Sale
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.sale_repository import SaleRepository
from bizdesk.schemas.sale_schemas import SaleCreate, SaleUpdate
from bizdesk.services.period import resolve_period
from bizdesk.services.stock_service import StockService

logger = logging.getLogger(__name__)


class SaleService:
    """Service layer for sale business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SaleRepository(db)
        self.stock = StockService(db)

    def _check_stock(self, product_name: str, quantity: int, context: TenantContext, released: int = 0) -> None:
        """
        Verify enough stock remains for a sale.

        ``released`` is the quantity already held by the sale being edited,
        which goes back into stock before the new quantity is taken.
        """
        available = self.stock.available_quantity(product_name, context) + released
        if available < quantity:
            raise ValidationException(
                f"Insufficient stock for {product_name.strip()}: "
                f"{max(available, 0)} available, {quantity} requested"
            )

    def create_sale(self, data: SaleCreate, context: TenantContext) -> Sale:
        """
        Record a sale for the caller's tenant.

        Raises:
            NoTenantContextError: If called without a tenant context
            ValidationException: If the product lacks available stock
        """
        context = require_context(context, "create Sale")
        self._check_stock(data.product_name, data.quantity, context)

        sale = Sale(
            product_name=data.product_name.strip(),
            quantity=data.quantity,
            unit_price=data.unit_price,
            total_price=line_total(data.quantity, data.unit_price),
            sale_date=data.sale_date or date.today(),
            customer=data.customer,
            user_id=context.acting_user_id,
        )
        sale = self.repo.create(sale, context)
        logger.info("Sale %s recorded: %s x%s", sale.id, sale.product_name, sale.quantity)
        return sale

    def list_sales(
        self,
        context: TenantContext,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Sale]:
        if start_date is not None or end_date is not None:
            start, end = resolve_period(start_date, end_date)
            return self.repo.get_by_period(start, end, context)
        return self.repo.get_all(context)

    def get_sale(self, sale_id: int, context: TenantContext) -> Sale:
        """
        Get sale by ID.

        Raises:
            NotFoundException: If sale doesn't exist or belongs to another tenant
        """
        sale = self.repo.get_by_id(sale_id, context)
        if not sale:
            raise NotFoundException(not_found_message("Sale", sale_id))
        return sale

    def update_sale(self, sale_id: int, data: SaleUpdate, context: TenantContext) -> Sale:
        """
        Update a sale and recompute its total.

        Changing the product or raising the quantity re-checks stock.

        Raises:
            NotFoundException: If sale doesn't exist
            CrossTenantAccessError: If sale belongs to another tenant
            ValidationException: If the new quantity exceeds available stock
        """
        sale = self.repo.get_for_write(sale_id, context)
        if not sale:
            raise NotFoundException(not_found_message("Sale", sale_id))

        new_product = data.product_name if data.product_name is not None else sale.product_name
        new_quantity = data.quantity if data.quantity is not None else sale.quantity
        same_product = normalize_product(new_product) == normalize_product(sale.product_name)

        if not same_product:
            self._check_stock(new_product, new_quantity, context)
        elif new_quantity > sale.quantity:
            self._check_stock(new_product, new_quantity, context, released=sale.quantity)

        if data.product_name is not None:
            sale.product_name = data.product_name.strip()
        if data.quantity is not None:
            sale.quantity = data.quantity
        if data.unit_price is not None:
            sale.unit_price = data.unit_price
        if data.sale_date is not None:
            sale.sale_date = data.sale_date
        if data.customer is not None:
            sale.customer = data.customer

        sale.recalculate_total()
        return self.repo.update(sale, context)

    def delete_sale(self, sale_id: int, context: TenantContext) -> None:
        """
        Delete a sale, returning its quantity to stock.

        Raises:
            NotFoundException: If sale doesn't exist
            CrossTenantAccessError: If sale belongs to another tenant
        """
        sale = self.repo.get_for_write(sale_id, context)
        if not sale:
            raise NotFoundException(not_found_message("Sale", sale_id))
        self.repo.delete(sale, context)
        logger.info("Sale %s deleted", sale_id)

    def total_for_period(
        self, start_date: Optional[date], end_date: Optional[date], context: TenantContext
    ) -> tuple[date, date, Decimal]:
        start, end = resolve_period(start_date, end_date)
        return start, end, self.repo.total_for_period(start, end, context)
