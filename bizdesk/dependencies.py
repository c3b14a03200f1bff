from dataclasses import dataclass
from typing import AsyncIterator

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import NoPrincipalException
from bizdesk.core.security import extract_principal
from bizdesk.core.tenant_scope import tenant_scope
from bizdesk.database import get_db
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.tenant_resolution_service import TenantResolver

# auto_error=False so a missing header raises our own 401 instead of a 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as asserted by the token"""

    email: str
    tenant_claim: str | None = None


async def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    """
    FastAPI dependency validating the bearer token.

    Used directly only by endpoints that run before the caller has a
    tenant (sign-up); everything else depends on get_tenant_context.

    Raises:
        NoPrincipalException: If the header is missing or the token invalid
    """
    if credentials is None or not credentials.credentials:
        raise NoPrincipalException("Not authenticated")
    email, tenant_claim = extract_principal(credentials.credentials)
    return Principal(email=email, tenant_claim=tenant_claim)


async def get_tenant_context(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
) -> AsyncIterator[TenantContext]:
    """
    FastAPI dependency resolving the caller's tenant.

    Flow:
    1. Validate the JWT (get_principal)
    2. Look up the user by email and follow its tenant
    3. Reject inactive or expired tenants
    4. Hold the tenant as the request's ambient scope while the endpoint
       runs, releasing it when the request ends

    Raises:
        UnauthorizedException: If no tenant can be resolved (401)
        TenantExpiredException: If the subscription has expired (403)
    """
    context = TenantResolver(db).resolve(principal.email, principal.tenant_claim)
    with tenant_scope(context.tenant_uuid):
        yield context
