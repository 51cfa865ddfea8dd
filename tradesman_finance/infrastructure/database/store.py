"""SQL-backed session store implementing the persistence port"""

from typing import Optional

from sqlalchemy.orm import Session

from tradesman_finance.infrastructure.database.repositories import SnapshotRepository


class SqlSessionStore:
    """
    Session store over the snapshot table, bound to one session id.

    Each write commits on its own, so a key is replaced atomically.
    """

    def __init__(self, db: Session, session_id: str):
        self.db = db
        self.session_id = session_id
        self.repository = SnapshotRepository(db)

    def get(self, key: str) -> Optional[str]:
        snapshot = self.repository.get_snapshot(self.session_id, key)
        return snapshot.payload if snapshot is not None else None

    def set(self, key: str, value: str) -> None:
        try:
            self.repository.upsert_snapshot(self.session_id, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def clear(self) -> None:
        try:
            self.repository.delete_session(self.session_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def keys(self) -> list[str]:
        return self.repository.list_storage_keys(self.session_id)
