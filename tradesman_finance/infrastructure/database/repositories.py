"""Data access layer for calculator snapshots"""

from typing import List, Optional

from sqlalchemy.orm import Session

from tradesman_finance.infrastructure.database.models import CalculatorSnapshot


class SnapshotRepository:
    """Repository for session-scoped calculator snapshots"""

    def __init__(self, db: Session):
        self.db = db

    def get_snapshot(self, session_id: str, storage_key: str) -> Optional[CalculatorSnapshot]:
        return (
            self.db.query(CalculatorSnapshot)
            .filter(
                CalculatorSnapshot.session_id == session_id,
                CalculatorSnapshot.storage_key == storage_key,
            )
            .first()
        )

    def upsert_snapshot(self, session_id: str, storage_key: str, payload: str) -> CalculatorSnapshot:
        """Replace the stored payload for the key, creating the row on first write"""
        snapshot = self.get_snapshot(session_id, storage_key)
        if snapshot is None:
            snapshot = CalculatorSnapshot(session_id=session_id, storage_key=storage_key, payload=payload)
            self.db.add(snapshot)
        else:
            snapshot.payload = payload
        self.db.flush()
        return snapshot

    def list_storage_keys(self, session_id: str) -> List[str]:
        rows = (
            self.db.query(CalculatorSnapshot.storage_key)
            .filter(CalculatorSnapshot.session_id == session_id)
            .order_by(CalculatorSnapshot.storage_key)
            .all()
        )
        return [row.storage_key for row in rows]

    def delete_session(self, session_id: str) -> int:
        """Remove every snapshot in a session, returning how many were deleted"""
        return (
            self.db.query(CalculatorSnapshot)
            .filter(CalculatorSnapshot.session_id == session_id)
            .delete(synchronize_session=False)
        )
