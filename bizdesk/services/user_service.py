import logging
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import (
    ForbiddenException,
    NotFoundException,
    UserLimitExceededException,
    ValidationException,
    not_found_message,
)
from bizdesk.core.isolation import require_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.models.user import User
from bizdesk.repositories.user_repository import UserRepository
from bizdesk.schemas.user_schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for managing the users of a tenant"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def list_users(self, context: TenantContext) -> list[User]:
        return self.repo.get_all(context)

    def get_user(self, user_id: int, context: TenantContext) -> User:
        user = self.repo.get_by_id(user_id, context)
        if not user:
            raise NotFoundException(not_found_message("User", user_id))
        return user

    def ensure_user_capacity(self, context: TenantContext) -> None:
        """
        Check the tenant's plan allows one more active user.

        Raises:
            UserLimitExceededException: If the plan's user cap is reached
        """
        plan = context.tenant.plan
        if plan.max_users is None:
            return
        active = self.repo.count_active(context)
        if active >= plan.max_users:
            logger.info(
                "User limit reached for tenant %s (%s/%s on %s plan)",
                context.tenant_uuid,
                active,
                plan.max_users,
                plan.value,
            )
            raise UserLimitExceededException(
                f"The {plan.value} plan allows at most {plan.max_users} user(s); "
                "upgrade the subscription to add more"
            )

    def create_user(self, data: UserCreate, context: TenantContext) -> User:
        """
        Add a user to the caller's tenant.

        Emails are unique across all tenants since they identify the
        principal during tenant resolution.

        Raises:
            ForbiddenException: If user is not ADMIN
            ValidationException: If the email is already registered
            UserLimitExceededException: If the plan's user cap is reached
        """
        context = require_context(context, "create User")
        if not context.is_admin():
            raise ForbiddenException("Only admins can add users")

        email = data.email.strip().lower()
        if self.repo.get_by_email_for_resolution(email) is not None:
            raise ValidationException(f"Email {email} is already registered")

        self.ensure_user_capacity(context)

        user = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role,
            is_active=True,
        )
        user = self.repo.create(user, context)
        logger.info("User %s added with role %s", user.id, user.role.value)
        return user

    def update_user(self, user_id: int, data: UserUpdate, context: TenantContext) -> User:
        """
        Update a user.

        Admins may edit anyone; other users only their own name. Nobody can
        change their own role.

        Raises:
            NotFoundException: If user doesn't exist
            CrossTenantAccessError: If user belongs to another tenant
            ForbiddenException: If the caller may not make this change
        """
        user = self.repo.get_for_write(user_id, context)
        if not user:
            raise NotFoundException(not_found_message("User", user_id))

        is_self = context.user is not None and context.user.id == user.id
        if not context.is_admin() and not is_self:
            raise ForbiddenException("Only admins can edit other users")
        if data.role is not None and data.role != user.role:
            if not context.is_admin():
                raise ForbiddenException("Only admins can change roles")
            if is_self:
                raise ForbiddenException("Cannot change your own role")

        if data.first_name is not None:
            user.first_name = data.first_name
        if data.last_name is not None:
            user.last_name = data.last_name
        if data.role is not None:
            user.role = data.role

        return self.repo.update(user, context)

    def deactivate_user(self, user_id: int, context: TenantContext) -> User:
        """
        Deactivate a user. Users are never hard-deleted since their
        purchases, sales and expenses still reference them.

        Raises:
            ForbiddenException: If caller is not ADMIN or targets themselves
            NotFoundException: If user doesn't exist
            CrossTenantAccessError: If user belongs to another tenant
        """
        user = self.repo.get_for_write(user_id, context)
        if not user:
            raise NotFoundException(not_found_message("User", user_id))
        if not context.is_admin():
            raise ForbiddenException("Only admins can remove users")
        if context.user is not None and context.user.id == user.id:
            raise ForbiddenException("Cannot remove yourself from tenant")

        user.is_active = False
        user = self.repo.update(user, context)
        logger.info("User %s deactivated", user.id)
        return user
