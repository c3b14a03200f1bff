from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.sale_service import SaleService
from bizdesk.schemas.common_schemas import PeriodTotalResponse
from bizdesk.schemas.sale_schemas import (
    SaleCreate,
    SaleUpdate,
    SaleResponse,
    SaleListResponse,
)

router = APIRouter()


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    data: SaleCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Record a sale; fails if the product lacks stock"""
    service = SaleService(db)
    return service.create_sale(data, context)


@router.get("", response_model=SaleListResponse)
async def list_sales(
    start_date: Optional[date] = Query(None, description="Filter from date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Filter to date (inclusive)"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """List sales, newest first"""
    service = SaleService(db)
    sales = service.list_sales(context, start_date=start_date, end_date=end_date)
    return SaleListResponse(sales=sales, total=len(sales))


@router.get("/total", response_model=PeriodTotalResponse)
async def sales_total(
    start_date: Optional[date] = Query(None, description="Defaults to the first day of the month"),
    end_date: Optional[date] = Query(None, description="Defaults to today"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Sales revenue over a period"""
    service = SaleService(db)
    start, end, total = service.total_for_period(start_date, end_date, context)
    return PeriodTotalResponse(start_date=start, end_date=end, total=float(total))


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = SaleService(db)
    return service.get_sale(sale_id, context)


@router.patch("/{sale_id}", response_model=SaleResponse)
async def update_sale(
    sale_id: int,
    data: SaleUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Update sale details; the total is recomputed"""
    service = SaleService(db)
    return service.update_sale(sale_id, data, context)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(
    sale_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = SaleService(db)
    service.delete_sale(sale_id, context)
    return None
