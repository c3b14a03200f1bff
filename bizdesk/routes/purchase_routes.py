from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.purchase_service import PurchaseService
from bizdesk.schemas.common_schemas import PeriodTotalResponse
from bizdesk.schemas.purchase_schemas import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseResponse,
    PurchaseListResponse,
)

router = APIRouter()


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    data: PurchaseCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Record a purchase of stock for the current business"""
    service = PurchaseService(db)
    return service.create_purchase(data, context)


@router.get("", response_model=PurchaseListResponse)
async def list_purchases(
    start_date: Optional[date] = Query(None, description="Filter from date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Filter to date (inclusive)"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """List purchases, newest first"""
    service = PurchaseService(db)
    purchases = service.list_purchases(context, start_date=start_date, end_date=end_date)
    return PurchaseListResponse(purchases=purchases, total=len(purchases))


@router.get("/total", response_model=PeriodTotalResponse)
async def purchases_total(
    start_date: Optional[date] = Query(None, description="Defaults to the first day of the month"),
    end_date: Optional[date] = Query(None, description="Defaults to today"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Total amount spent on purchases over a period"""
    service = PurchaseService(db)
    start, end, total = service.total_for_period(start_date, end_date, context)
    return PeriodTotalResponse(start_date=start, end_date=end, total=float(total))


@router.get("/{purchase_id}", response_model=PurchaseResponse)
async def get_purchase(
    purchase_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = PurchaseService(db)
    return service.get_purchase(purchase_id, context)


@router.patch("/{purchase_id}", response_model=PurchaseResponse)
async def update_purchase(
    purchase_id: int,
    data: PurchaseUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Update purchase details; the total is recomputed"""
    service = PurchaseService(db)
    return service.update_purchase(purchase_id, data, context)


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_purchase(
    purchase_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = PurchaseService(db)
    service.delete_purchase(purchase_id, context)
    return None
