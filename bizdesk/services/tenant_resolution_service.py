import logging
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import (
    NoPrincipalException,
    TenantExpiredException,
    TenantInactiveException,
    TenantNotFoundException,
)
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class TenantResolver:
    """
    Turns an authenticated principal into a TenantContext.

    The principal's user record is the only source of truth for which
    tenant a request belongs to. A tenant claim in the token is accepted
    only as a cross-check, never as an override.
    """

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def resolve(self, email: str, tenant_claim: str | None = None) -> TenantContext:
        """
        Resolve the tenant of ``email``.

        Args:
            email: Principal from the token's 'sub' claim
            tenant_claim: Optional 'tenant_id' claim from the same token

        Returns:
            TenantContext for the user and its tenant

        Raises:
            NoPrincipalException: If the principal is empty or deactivated
            TenantNotFoundException: If no user or tenant matches, or the
                tenant claim disagrees with the user's tenant
            TenantInactiveException: If the tenant is deactivated
            TenantExpiredException: If the tenant's subscription has expired
        """
        if not email or not email.strip():
            raise NoPrincipalException("Not authenticated")

        user = self.user_repo.get_by_email_for_resolution(email)
        if user is None or user.tenant is None:
            logger.warning("Tenant resolution failed: no tenant for principal %s", email)
            raise TenantNotFoundException("No business account found for this user")

        if not user.is_active:
            logger.warning("Tenant resolution failed: user %s is deactivated", user.id)
            raise NoPrincipalException("User account is deactivated")

        tenant = user.tenant
        if tenant_claim is not None and tenant_claim != tenant.tenant_uuid:
            logger.warning(
                "SECURITY: token tenant claim %s does not match tenant %s of user %s",
                tenant_claim,
                tenant.tenant_uuid,
                user.id,
            )
            raise TenantNotFoundException("Token tenant does not match user")

        if not tenant.is_active:
            logger.warning("Tenant resolution failed: tenant %s is inactive", tenant.tenant_uuid)
            raise TenantInactiveException("Business account is deactivated")

        if tenant.is_expired():
            logger.info("Tenant %s subscription expired at %s", tenant.tenant_uuid, tenant.expires_at)
            raise TenantExpiredException("Subscription has expired")

        return TenantContext.for_user(user)
