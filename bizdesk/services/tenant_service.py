import logging
import uuid
from datetime import datetime, timedelta, UTC

from sqlalchemy.orm import Session

from bizdesk.config import settings
from bizdesk.core.exceptions import (
    ForbiddenException,
    UserLimitExceededException,
    ValidationException,
)
from bizdesk.core.tenant_scope import tenant_scope
from bizdesk.models.plan import SubscriptionPlan
from bizdesk.models.role import UserRole
from bizdesk.models.tenant import Tenant
from bizdesk.models.tenant_context import TenantContext
from bizdesk.models.user import User
from bizdesk.repositories.tenant_repository import TenantRepository
from bizdesk.repositories.user_repository import UserRepository
from bizdesk.schemas.tenant_schemas import TenantSignupRequest, TenantUpdate
from bizdesk.services.currency_service import CurrencyService

logger = logging.getLogger(__name__)


class TenantService:
    """Service layer for tenant lifecycle and administration"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.user_repo = UserRepository(db)

    def create_tenant(self, data: TenantSignupRequest) -> Tenant:
        """
        Create a tenant with a fresh random identifier.

        When TRIAL_PERIOD_DAYS is set the tenant expires after that many
        days; otherwise it never expires.

        Raises:
            ValidationException: If a business with this name already exists
        """
        name = data.name.strip()
        if self.tenant_repo.exists_by_name(name):
            raise ValidationException(f"A business named {name} already exists")

        expires_at = None
        if settings.TRIAL_PERIOD_DAYS > 0:
            expires_at = datetime.now(UTC).replace(tzinfo=None) + timedelta(
                days=settings.TRIAL_PERIOD_DAYS
            )

        tenant = Tenant(
            tenant_uuid=str(uuid.uuid4()),
            name=name,
            phone=data.phone,
            address=data.address,
            city=data.city,
            country=data.country,
            tax_id=data.tax_id,
            is_active=True,
            expires_at=expires_at,
            plan=SubscriptionPlan.FREE,
        )
        tenant = self.tenant_repo.create(tenant)
        logger.info("Tenant %s created for business %r", tenant.tenant_uuid, tenant.name)
        return tenant

    def seed_defaults(self, tenant: Tenant) -> None:
        """
        Seed a tenant's default data inside its own tenant scope.

        Safe to call any number of times; existing records are kept.
        """
        with tenant_scope(tenant.tenant_uuid):
            context = TenantContext.for_system(tenant)
            CurrencyService(self.db).seed_default_currencies(context)

    def seed_all_tenants(self) -> int:
        """
        Re-run seeding for every active tenant (startup task).

        Returns:
            Number of tenants processed
        """
        tenants = self.tenant_repo.get_active()
        for tenant in tenants:
            self.seed_defaults(tenant)
        logger.info("Default data checked for %d active tenant(s)", len(tenants))
        return len(tenants)

    def signup(self, email: str, data: TenantSignupRequest) -> tuple[Tenant, User]:
        """
        Register a new business.

        Creates the tenant, makes the authenticated principal its first
        admin and seeds default data.

        Args:
            email: The principal (token subject) signing up
            data: Business and admin details

        Returns:
            (tenant, admin user)

        Raises:
            ValidationException: If the email already belongs to a tenant
                or the business name is taken
        """
        email = email.strip().lower()
        if self.user_repo.get_by_email_for_resolution(email) is not None:
            raise ValidationException(f"Email {email} is already registered")

        tenant = self.create_tenant(data)

        admin = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=UserRole.ADMIN,
            is_active=True,
        )
        with tenant_scope(tenant.tenant_uuid):
            admin = self.user_repo.create(admin, TenantContext.for_system(tenant))

        self.seed_defaults(tenant)
        logger.info("Signup complete: tenant %s, admin user %s", tenant.tenant_uuid, admin.id)
        return tenant, admin

    def get_current_tenant(self, context: TenantContext) -> Tenant:
        return context.tenant

    def update_tenant(self, data: TenantUpdate, context: TenantContext) -> Tenant:
        """
        Update tenant details (ADMIN only).

        Raises:
            ForbiddenException: If user is not ADMIN
            ValidationException: If the new name is taken
        """
        if not context.is_admin():
            raise ForbiddenException("Only admins can update tenant details")

        tenant = context.tenant
        if data.name is not None:
            name = data.name.strip()
            if name != tenant.name and self.tenant_repo.exists_by_name(name):
                raise ValidationException(f"A business named {name} already exists")
            tenant.name = name
        if data.phone is not None:
            tenant.phone = data.phone
        if data.address is not None:
            tenant.address = data.address
        if data.city is not None:
            tenant.city = data.city
        if data.country is not None:
            tenant.country = data.country
        if data.tax_id is not None:
            tenant.tax_id = data.tax_id

        return self.tenant_repo.update(tenant)

    def change_plan(self, plan: SubscriptionPlan, context: TenantContext) -> Tenant:
        """
        Switch the tenant's subscription plan (ADMIN only).

        Downgrading is refused while the tenant has more active users than
        the new plan allows.

        Raises:
            ForbiddenException: If user is not ADMIN
            UserLimitExceededException: If active users exceed the new cap
        """
        if not context.is_admin():
            raise ForbiddenException("Only admins can change the subscription plan")

        active = self.user_repo.count_active(context)
        if plan.max_users is not None and active > plan.max_users:
            raise UserLimitExceededException(
                f"The {plan.value} plan allows at most {plan.max_users} user(s) "
                f"but the business has {active} active users"
            )

        tenant = context.tenant
        previous = tenant.plan
        tenant.plan = plan
        tenant = self.tenant_repo.update(tenant)
        logger.info("Tenant %s plan changed: %s -> %s", tenant.tenant_uuid, previous.value, plan.value)
        return tenant

    def deactivate_tenant(self, context: TenantContext) -> Tenant:
        """
        Deactivate the tenant (ADMIN only). Its users can no longer sign in
        and its data is kept.
        """
        if not context.is_admin():
            raise ForbiddenException("Only admins can deactivate the business")

        tenant = context.tenant
        tenant.is_active = False
        tenant = self.tenant_repo.update(tenant)
        logger.warning("Tenant %s deactivated by user %s", tenant.tenant_uuid, context.user.id if context.user else None)
        return tenant
