"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from tradesman_finance.api.main import create_app
from tradesman_finance.domain.models import AffordabilityInputs, BusinessAge, CreditProfile
from tradesman_finance.infrastructure.database.models import Base
from tradesman_finance.infrastructure.database.session import get_db


# Test database: one shared in-memory connection
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def typical_affordability() -> AffordabilityInputs:
    """Established sole trader: £10k revenue, £6k costs, £500 existing repayments"""
    return AffordabilityInputs(
        monthly_revenue=10_000,
        monthly_expenses=6_000,
        existing_debt_payments=500,
        business_age=BusinessAge.TWO_TO_FIVE,
        credit_profile=CreditProfile.GOOD,
    )
