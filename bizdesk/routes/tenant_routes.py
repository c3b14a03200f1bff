from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import Principal, get_principal, get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.tenant_service import TenantService
from bizdesk.schemas.tenant_schemas import (
    TenantPlanUpdate,
    TenantResponse,
    TenantSignupRequest,
    TenantSignupResponse,
    TenantUpdate,
)
from bizdesk.schemas.user_schemas import UserResponse

router = APIRouter()


@router.post("/signup", response_model=TenantSignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: TenantSignupRequest,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """
    Register a new business.

    The authenticated caller becomes the business's first ADMIN. This
    endpoint only needs a valid token since the caller has no tenant yet.
    Default currencies (XOF, EUR, USD) are created automatically.
    """
    service = TenantService(db)
    tenant, admin = service.signup(principal.email, data)
    return TenantSignupResponse(
        tenant=TenantResponse.from_tenant(tenant),
        admin=UserResponse.model_validate(admin),
    )


@router.get("/me", response_model=TenantResponse)
async def get_current_tenant(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Get current tenant details"""
    service = TenantService(db)
    return TenantResponse.from_tenant(service.get_current_tenant(context))


@router.patch("/me", response_model=TenantResponse)
async def update_tenant(
    tenant_update: TenantUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Update business details.

    - **Requires ADMIN permissions**
    """
    service = TenantService(db)
    return TenantResponse.from_tenant(service.update_tenant(tenant_update, context))


@router.patch("/me/plan", response_model=TenantResponse)
async def change_plan(
    plan_update: TenantPlanUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Change the subscription plan.

    - **Requires ADMIN permissions**
    - Downgrading fails while more users are active than the plan allows
    """
    service = TenantService(db)
    return TenantResponse.from_tenant(service.change_plan(plan_update.plan, context))


@router.post("/me/deactivate", response_model=TenantResponse)
async def deactivate_tenant(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Deactivate the business.

    - **Requires ADMIN permissions**
    - Subsequent requests from its users are rejected with 401
    """
    service = TenantService(db)
    return TenantResponse.from_tenant(service.deactivate_tenant(context))
