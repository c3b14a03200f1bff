from bizdesk.models.currency import Currency
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.scoped_repository import TenantScopedRepository


class CurrencyRepository(TenantScopedRepository[Currency]):
    """Repository for Currency data access"""

    model = Currency

    def get_by_code(self, code: str, context: TenantContext) -> Currency | None:
        return self.query(context).filter(Currency.code == code.strip().upper()).first()

    def exists_by_code(self, code: str, context: TenantContext) -> bool:
        return self.get_by_code(code, context) is not None

    def get_default(self, context: TenantContext) -> Currency | None:
        return self.query(context).filter(Currency.is_default.is_(True)).first()

    def clear_default(self, context: TenantContext) -> None:
        """
        Unset is_default on every currency of the tenant.

        Flushes without committing so the caller can set the new default
        in the same transaction.
        """
        for currency in self.query(context).filter(Currency.is_default.is_(True)).all():
            currency.is_default = False
        self.db.flush()
