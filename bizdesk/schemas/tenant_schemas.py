from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from bizdesk.models.plan import SubscriptionPlan
from bizdesk.schemas.user_schemas import UserResponse


class TenantSignupRequest(BaseModel):
    """Business sign-up: creates the tenant and its first admin user"""

    name: str = Field(..., min_length=2, max_length=100, description="Business name")
    phone: str = Field(..., min_length=1, max_length=20)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=50, description="NINEA, SIRET or similar")
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class TenantResponse(BaseModel):
    """Tenant details response"""

    id: str  # the opaque tenant_uuid, never the database id
    name: str
    phone: str
    address: Optional[str]
    city: Optional[str]
    country: Optional[str]
    tax_id: Optional[str]
    is_active: bool
    expires_at: Optional[datetime]
    plan: SubscriptionPlan
    max_users: Optional[int]
    created_at: datetime

    @classmethod
    def from_tenant(cls, tenant) -> "TenantResponse":
        return cls.model_validate(
            {
                "id": tenant.tenant_uuid,
                "name": tenant.name,
                "phone": tenant.phone,
                "address": tenant.address,
                "city": tenant.city,
                "country": tenant.country,
                "tax_id": tenant.tax_id,
                "is_active": tenant.is_active,
                "expires_at": tenant.expires_at,
                "plan": tenant.plan,
                "max_users": tenant.plan.max_users,
                "created_at": tenant.created_at,
            }
        )


class TenantSignupResponse(BaseModel):
    """Created tenant plus its admin user"""

    tenant: TenantResponse
    admin: UserResponse


class TenantUpdate(BaseModel):
    """Update tenant details (ADMIN only)"""

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=50)


class TenantPlanUpdate(BaseModel):
    """Change subscription plan (ADMIN only)"""

    plan: SubscriptionPlan
