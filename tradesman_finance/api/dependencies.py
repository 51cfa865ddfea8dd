"""Dependency injection for FastAPI endpoints"""

import uuid
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from tradesman_finance.domain.persistence import CalculatorPersistence
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy
from tradesman_finance.infrastructure.clients.leads import LeadWebhookClient
from tradesman_finance.infrastructure.database.session import get_db
from tradesman_finance.infrastructure.database.store import SqlSessionStore
from tradesman_finance.infrastructure.observability.metrics import record_store_corruption


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    """Session from the X-Session-ID header, or a fresh one for first-time visitors"""
    return x_session_id or str(uuid.uuid4())


def get_policy() -> FinancePolicy:
    """Provide the active finance policy"""
    return DEFAULT_POLICY


def persistence_for(db: Session, session_id: str) -> CalculatorPersistence:
    """Calculator persistence over the SQL store for one session"""
    return CalculatorPersistence(SqlSessionStore(db, session_id), on_corrupt=record_store_corruption)


def get_persistence(
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
) -> CalculatorPersistence:
    return persistence_for(db, session_id)


def get_lead_client() -> LeadWebhookClient:
    """Provide lead webhook client instance"""
    return LeadWebhookClient()
