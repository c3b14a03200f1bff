import logging
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import (
    ForbiddenException,
    NotFoundException,
    ValidationException,
    not_found_message,
)
from bizdesk.core.isolation import require_context
from bizdesk.models.currency import Currency
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.currency_repository import CurrencyRepository
from bizdesk.schemas.currency_schemas import CurrencyCreate, CurrencyUpdate

logger = logging.getLogger(__name__)

# Seeded for every new tenant; rates are against the West African CFA franc
DEFAULT_CURRENCIES = (
    {"code": "XOF", "name": "Franc CFA", "symbol": "CFA", "country": "West Africa", "exchange_rate": 1.0, "is_default": True},
    {"code": "EUR", "name": "Euro", "symbol": "€", "country": "European Union", "exchange_rate": 655.957, "is_default": False},
    {"code": "USD", "name": "US Dollar", "symbol": "$", "country": "United States", "exchange_rate": 600.0, "is_default": False},
)


class CurrencyService:
    """
    Service layer for tenant currencies.

    Each tenant keeps at most one default currency. Everyone in a tenant can
    read its currencies; only admins can change them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CurrencyRepository(db)

    def list_currencies(self, context: TenantContext) -> list[Currency]:
        return self.repo.get_all(context)

    def get_currency(self, currency_id: int, context: TenantContext) -> Currency:
        currency = self.repo.get_by_id(currency_id, context)
        if not currency:
            raise NotFoundException(not_found_message("Currency", currency_id))
        return currency

    def get_by_code(self, code: str, context: TenantContext) -> Currency:
        currency = self.repo.get_by_code(code, context)
        if not currency:
            raise NotFoundException(not_found_message("Currency", code.strip().upper()))
        return currency

    def get_default(self, context: TenantContext) -> Currency:
        """
        Get the tenant's default currency.

        Raises:
            NotFoundException: If no default currency is configured
        """
        currency = self.repo.get_default(context)
        if not currency:
            raise NotFoundException("No default currency configured")
        return currency

    def create_currency(self, data: CurrencyCreate, context: TenantContext) -> Currency:
        """
        Add a currency to the tenant.

        The tenant's first currency always becomes the default; creating a
        currency with is_default=True demotes the previous default.

        Raises:
            ForbiddenException: If user is not ADMIN
            ValidationException: If the code already exists in this tenant
        """
        context = require_context(context, "create Currency")
        if not context.is_admin():
            raise ForbiddenException("Only admins can manage currencies")

        code = data.code.strip().upper()
        if self.repo.exists_by_code(code, context):
            raise ValidationException(f"Currency {code} already exists")

        is_default = data.is_default or self.repo.count(context) == 0
        if is_default:
            self.repo.clear_default(context)

        currency = Currency(
            code=code,
            name=data.name,
            symbol=data.symbol,
            country=data.country,
            exchange_rate=data.exchange_rate,
            is_default=is_default,
        )
        currency = self.repo.create(currency, context)
        logger.info("Currency %s added (default=%s)", currency.code, currency.is_default)
        return currency

    def update_currency(
        self, currency_id: int, data: CurrencyUpdate, context: TenantContext
    ) -> Currency:
        """
        Update a currency.

        Raises:
            ForbiddenException: If user is not ADMIN
            NotFoundException: If currency doesn't exist
            CrossTenantAccessError: If currency belongs to another tenant
            ValidationException: If the new code is taken or the default is unset
        """
        currency = self.repo.get_for_write(currency_id, context)
        if not currency:
            raise NotFoundException(not_found_message("Currency", currency_id))
        if not context.is_admin():
            raise ForbiddenException("Only admins can manage currencies")
        if data.is_default is False and currency.is_default:
            raise ValidationException("Set another currency as default instead")

        if data.code is not None:
            code = data.code.strip().upper()
            if code != currency.code and self.repo.exists_by_code(code, context):
                raise ValidationException(f"Currency {code} already exists")
            currency.code = code
        if data.name is not None:
            currency.name = data.name
        if data.symbol is not None:
            currency.symbol = data.symbol
        if data.country is not None:
            currency.country = data.country
        if data.exchange_rate is not None:
            currency.exchange_rate = data.exchange_rate

        if data.is_default is True and not currency.is_default:
            self.repo.clear_default(context)
            currency.is_default = True

        return self.repo.update(currency, context)

    def set_default(self, currency_id: int, context: TenantContext) -> Currency:
        """Make a currency the tenant's default"""
        currency = self.repo.get_for_write(currency_id, context)
        if not currency:
            raise NotFoundException(not_found_message("Currency", currency_id))
        if not context.is_admin():
            raise ForbiddenException("Only admins can manage currencies")

        if not currency.is_default:
            self.repo.clear_default(context)
            currency.is_default = True
            currency = self.repo.update(currency, context)
            logger.info("Default currency is now %s", currency.code)
        return currency

    def delete_currency(self, currency_id: int, context: TenantContext) -> None:
        """
        Delete a currency.

        Raises:
            ForbiddenException: If user is not ADMIN
            NotFoundException: If currency doesn't exist
            CrossTenantAccessError: If currency belongs to another tenant
            ValidationException: If it is the default currency
        """
        currency = self.repo.get_for_write(currency_id, context)
        if not currency:
            raise NotFoundException(not_found_message("Currency", currency_id))
        if not context.is_admin():
            raise ForbiddenException("Only admins can manage currencies")
        if currency.is_default:
            raise ValidationException("The default currency cannot be deleted")

        self.repo.delete(currency, context)
        logger.info("Currency %s deleted", currency.code)

    def seed_default_currencies(self, context: TenantContext) -> list[Currency]:
        """
        Add XOF, EUR and USD to a tenant.

        Idempotent: codes the tenant already has are skipped, and XOF only
        becomes default when the tenant has none yet.

        Returns:
            The currencies that were created
        """
        context = require_context(context, "seed currencies")
        has_default = self.repo.get_default(context) is not None

        created = []
        for entry in DEFAULT_CURRENCIES:
            if self.repo.exists_by_code(entry["code"], context):
                continue
            currency = Currency(**{**entry, "is_default": entry["is_default"] and not has_default})
            created.append(self.repo.create(currency, context))

        if created:
            logger.info(
                "Seeded currencies %s for tenant %s",
                ", ".join(c.code for c in created),
                context.tenant_uuid,
            )
        return created
