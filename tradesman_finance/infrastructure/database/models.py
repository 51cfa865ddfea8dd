"""SQLAlchemy ORM models for session-scoped calculator snapshots"""

import uuid
from sqlalchemy import Column, DateTime, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CalculatorSnapshot(Base):
    """Latest inputs+results pair for one calculator within one browsing session"""

    __tablename__ = "calculator_snapshot"
    __table_args__ = (UniqueConstraint("session_id", "storage_key", name="uq_snapshot_session_key"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(Text, nullable=False, index=True)
    storage_key = Column(Text, nullable=False)
    # Raw JSON text; decoding is the persistence layer's job so bad rows fail soft
    payload = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
