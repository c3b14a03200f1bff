from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.stock_service import StockService
from bizdesk.schemas.stock_schemas import (
    StockCheckResponse,
    StockItem,
    StockListResponse,
    StockValueResponse,
)

router = APIRouter()


@router.get("", response_model=StockListResponse)
async def list_stock(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Stock of every purchased product.

    Available quantity is purchases minus sales; lowest stock first.
    """
    service = StockService(db)
    items = service.list_stock(context)
    return StockListResponse(items=items, total=len(items))


@router.get("/out-of-stock", response_model=StockListResponse)
async def list_out_of_stock(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = StockService(db)
    items = service.out_of_stock(context)
    return StockListResponse(items=items, total=len(items))


@router.get("/low", response_model=StockListResponse)
async def list_low_stock(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Products still in stock but under the low-stock threshold"""
    service = StockService(db)
    items = service.low_stock(context)
    return StockListResponse(items=items, total=len(items))


@router.get("/value", response_model=StockValueResponse)
async def stock_value(
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Value of remaining stock at average purchase price"""
    service = StockService(db)
    return StockValueResponse(total_value=float(service.total_value(context)))


@router.get("/check", response_model=StockCheckResponse)
async def check_stock(
    product_name: str = Query(..., min_length=1),
    quantity: int = Query(..., gt=0),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Whether ``quantity`` units of a product can be sold"""
    service = StockService(db)
    available = service.available_quantity(product_name, context)
    return StockCheckResponse(
        product_name=product_name.strip(),
        requested=quantity,
        available=available,
        sufficient=available >= quantity,
    )


@router.get("/{product_name}", response_model=StockItem)
async def get_product_stock(
    product_name: str,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = StockService(db)
    return service.get_product_stock(product_name, context)
