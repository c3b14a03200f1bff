import os

# Settings are read at import time; give tests their own environment
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-bizdesk")
os.environ["SEED_DEFAULTS_ON_STARTUP"] = "false"
os.environ["TRIAL_PERIOD_DAYS"] = "0"

import pytest  # noqa: E402
from datetime import datetime, timedelta, UTC  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from jose import jwt  # noqa: E402

from bizdesk.database import get_db  # noqa: E402
from bizdesk.models.base import Base  # noqa: E402
from bizdesk.config import settings  # noqa: E402
# Import all model classes to ensure they're registered with SQLAlchemy
from bizdesk.models.tenant import Tenant  # noqa: E402,F401
from bizdesk.models.user import User  # noqa: E402
from bizdesk.models.purchase import Purchase  # noqa: E402,F401
from bizdesk.models.sale import Sale  # noqa: E402,F401
from bizdesk.models.expense import Expense  # noqa: E402,F401
from bizdesk.models.currency import Currency  # noqa: E402,F401
from bizdesk.models.role import UserRole  # noqa: E402
from bizdesk.models.tenant_context import TenantContext  # noqa: E402
from bizdesk.schemas.tenant_schemas import TenantSignupRequest  # noqa: E402
from bizdesk.services.tenant_service import TenantService  # noqa: E402
# Import FastAPI app AFTER model imports
from bizdesk.main import app  # noqa: E402

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ALICE = "alice@alpha.test"
BOB = "bob@beta.test"


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(
    email: str = ALICE, tenant_id: str | None = None, expired: bool = False
) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        email: Principal to embed in 'sub' claim
        tenant_id: Optional 'tenant_id' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": email, "exp": exp, "iat": datetime.now(UTC)}
    if tenant_id is not None:
        payload["tenant_id"] = tenant_id

    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


def headers_for(email: str, **kwargs) -> dict:
    return {"Authorization": f"Bearer {create_test_token(email, **kwargs)}"}


def signup_request(name: str, first_name: str = "Test", last_name: str = "Admin") -> TenantSignupRequest:
    return TenantSignupRequest(
        name=name,
        phone="+221 77 000 00 00",
        city="Dakar",
        country="Senegal",
        first_name=first_name,
        last_name=last_name,
    )


def add_user(db, tenant: Tenant, email: str, role: UserRole = UserRole.USER) -> User:
    """Insert a user directly, bypassing plan limits"""
    user = User(
        email=email,
        first_name="Extra",
        last_name="User",
        role=role,
        is_active=True,
        tenant_id=tenant.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def tenant_a(db_session):
    """Business A with its admin (Alice), seeded with default currencies"""
    return TenantService(db_session).signup(ALICE, signup_request("Alpha Boutique", "Alice", "Ndiaye"))


@pytest.fixture
def tenant_b(db_session):
    """Business B with its admin (Bob)"""
    return TenantService(db_session).signup(BOB, signup_request("Beta Market", "Bob", "Diallo"))


@pytest.fixture
def context_a(tenant_a):
    _, admin = tenant_a
    return TenantContext.for_user(admin)


@pytest.fixture
def context_b(tenant_b):
    _, admin = tenant_b
    return TenantContext.for_user(admin)


@pytest.fixture
def headers_a(tenant_a):
    """Authorization headers for Alice (admin of A)"""
    return headers_for(ALICE)


@pytest.fixture
def headers_b(tenant_b):
    """Authorization headers for Bob (admin of B)"""
    return headers_for(BOB)
