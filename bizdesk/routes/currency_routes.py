from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.currency_service import CurrencyService
from bizdesk.schemas.currency_schemas import (
    CurrencyCreate,
    CurrencyUpdate,
    CurrencyResponse,
    CurrencyListResponse,
)

router = APIRouter()


@router.get("", response_model=CurrencyListResponse)
async def list_currencies(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = CurrencyService(db)
    currencies = service.list_currencies(context)
    return CurrencyListResponse(currencies=currencies, total=len(currencies))


@router.post("", response_model=CurrencyResponse, status_code=status.HTTP_201_CREATED)
async def create_currency(
    data: CurrencyCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Add a currency (ADMIN only).

    The first currency of a business becomes its default.
    """
    service = CurrencyService(db)
    return service.create_currency(data, context)


@router.get("/default", response_model=CurrencyResponse)
async def get_default_currency(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = CurrencyService(db)
    return service.get_default(context)


@router.get("/code/{code}", response_model=CurrencyResponse)
async def get_currency_by_code(
    code: str,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = CurrencyService(db)
    return service.get_by_code(code, context)


@router.get("/{currency_id}", response_model=CurrencyResponse)
async def get_currency(
    currency_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = CurrencyService(db)
    return service.get_currency(currency_id, context)


@router.patch("/{currency_id}", response_model=CurrencyResponse)
async def update_currency(
    currency_id: int,
    data: CurrencyUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Update a currency (ADMIN only)"""
    service = CurrencyService(db)
    return service.update_currency(currency_id, data, context)


@router.post("/{currency_id}/default", response_model=CurrencyResponse)
async def set_default_currency(
    currency_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Make this the business's default currency (ADMIN only)"""
    service = CurrencyService(db)
    return service.set_default(currency_id, context)


@router.delete("/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_currency(
    currency_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Delete a currency (ADMIN only); the default currency cannot be deleted"""
    service = CurrencyService(db)
    service.delete_currency(currency_id, context)
    return None
