from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.user_service import UserService
from bizdesk.schemas.user_schemas import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserListResponse,
)

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """List all users of the current business, including deactivated ones"""
    service = UserService(db)
    users = service.list_users(context)
    return UserListResponse(users=users, total=len(users))


@router.get("/me", response_model=UserResponse)
async def get_me(context: TenantContext = Depends(get_tenant_context)):
    return context.user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Add a user to the current business (ADMIN only).

    Fails with 403 once the subscription plan's user limit is reached.
    """
    service = UserService(db)
    return service.create_user(data, context)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    return service.get_user(user_id, context)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Update a user.

    Admins can edit anyone and change roles; users can only edit their own
    name. Nobody can change their own role.
    """
    service = UserService(db)
    return service.update_user(user_id, data, context)


@router.delete("/{user_id}", response_model=UserResponse)
async def deactivate_user(
    user_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Deactivate a user (ADMIN only); their records are kept"""
    service = UserService(db)
    return service.deactivate_user(user_id, context)
