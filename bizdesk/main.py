import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from bizdesk.config import settings
from bizdesk.core.exceptions import (
    UnauthorizedException,
    NotFoundException,
    ForbiddenException,
    CrossTenantAccessError,
    ValidationException,
    NoTenantContextError,
)
from bizdesk.core.logging import configure_logging
from bizdesk.database import SessionLocal
from bizdesk.routes import (
    currency_routes,
    expense_routes,
    purchase_routes,
    sale_routes,
    stock_routes,
    tenant_routes,
    user_routes,
)
from bizdesk.services.tenant_service import TenantService

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEFAULTS_ON_STARTUP:
        db = SessionLocal()
        try:
            TenantService(db).seed_all_tenants()
        finally:
            db.close()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


# Foreign records look exactly like missing ones
@app.exception_handler(CrossTenantAccessError)
async def cross_tenant_exception_handler(request: Request, exc: CrossTenantAccessError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(NoTenantContextError)
async def no_tenant_context_exception_handler(request: Request, exc: NoTenantContextError):
    logger.error("No tenant context on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(tenant_routes.router, prefix="/api/tenants", tags=["Tenants"])
app.include_router(user_routes.router, prefix="/api/users", tags=["Users"])
app.include_router(purchase_routes.router, prefix="/api/purchases", tags=["Purchases"])
app.include_router(sale_routes.router, prefix="/api/sales", tags=["Sales"])
app.include_router(expense_routes.router, prefix="/api/expenses", tags=["Expenses"])
app.include_router(currency_routes.router, prefix="/api/currencies", tags=["Currencies"])
app.include_router(stock_routes.router, prefix="/api/stock", tags=["Stock"])
