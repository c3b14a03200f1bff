from bizdesk.models.user import User
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.scoped_repository import TenantScopedRepository


class UserRepository(TenantScopedRepository[User]):
    """Repository for User model operations"""

    model = User

    def get_by_email_for_resolution(self, email: str) -> User | None:
        """
        Get user by email across all tenants.

        Only tenant resolution (and sign-up's uniqueness check) may call
        this: it runs before any tenant context exists.
        """
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def count_active(self, context: TenantContext) -> int:
        return self.query(context).filter(User.is_active.is_(True)).count()
