class BizdeskException(Exception):
    """Base exception for bizdesk"""

    pass


class UnauthorizedException(BizdeskException):
    """Raised when the caller or its tenant cannot be established"""

    pass


class NoPrincipalException(UnauthorizedException):
    """Raised when a request carries no valid authenticated principal"""

    pass


class TenantNotFoundException(UnauthorizedException):
    """Raised when the principal has no user record or no tenant"""

    pass


class TenantInactiveException(UnauthorizedException):
    """Raised when the principal's tenant has been deactivated"""

    pass


class NotFoundException(BizdeskException):
    """Raised when resource not found"""

    pass


class ForbiddenException(BizdeskException):
    """Raised when the caller lacks permission for an operation"""

    pass


class TenantExpiredException(ForbiddenException):
    """Raised when the principal's tenant subscription has expired"""

    pass


class UserLimitExceededException(ForbiddenException):
    """Raised when a tenant already has as many users as its plan allows"""

    pass


class TenantReassignmentError(ForbiddenException):
    """Raised when code tries to move a scoped record to another tenant"""

    pass


class CrossTenantAccessError(ForbiddenException):
    """
    Raised when a write targets a record owned by another tenant.

    Surfaced to clients exactly like a missing record so the API cannot be
    used to probe for other tenants' ids.
    """

    def __init__(self, resource: str, resource_id: int | None, tenant_uuid: str | None = None):
        self.resource = resource
        self.resource_id = resource_id
        self.tenant_uuid = tenant_uuid
        super().__init__(not_found_message(resource, resource_id))


class ValidationException(BizdeskException):
    """Raised for business logic validation errors"""

    pass


class NoTenantContextError(BizdeskException):
    """
    Raised when tenant-scoped data is touched without a tenant context.

    Always a programming error, never a client error.
    """

    pass


def not_found_message(resource: str, resource_id: int | str | None) -> str:
    """Client-facing message shared by missing and foreign records"""
    return f"{resource} {resource_id} not found"
