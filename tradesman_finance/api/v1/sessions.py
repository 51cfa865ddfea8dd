"""Session endpoints - saved calculations per browsing session"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tradesman_finance.api.dependencies import persistence_for
from tradesman_finance.api.v1.schemas import CalculationResponse, SessionClearedResponse, SessionResponse
from tradesman_finance.domain.exceptions import SnapshotNotFoundError, UnknownCalculatorError
from tradesman_finance.domain.registry import CALCULATORS, get_calculator
from tradesman_finance.infrastructure.database.session import get_db
from tradesman_finance.infrastructure.database.store import SqlSessionStore

router = APIRouter()


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, db: Session = Depends(get_db)):
    """List the calculators with a saved calculation in this session"""
    saved = set(SqlSessionStore(db, session_id).keys())
    return SessionResponse(
        session_id=session_id,
        calculators=[spec.key for spec in CALCULATORS.values() if spec.storage_key in saved],
    )


@router.get("/sessions/{session_id}/calculators/{key}", response_model=CalculationResponse)
def get_saved_calculation(session_id: str, key: str, db: Session = Depends(get_db)):
    """
    Retrieve the latest saved calculation for a calculator.

    Unreadable stored data is discarded and reported as not found.
    """
    try:
        spec = get_calculator(key)
        saved = persistence_for(db, session_id).load(spec.storage_key)
        if saved is None:
            raise SnapshotNotFoundError(f"No saved {key} calculation for session {session_id}")
    except (UnknownCalculatorError, SnapshotNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return CalculationResponse(
        calculator=key,
        session_id=session_id,
        inputs=saved["inputs"],
        results=saved["results"],
    )


@router.delete("/sessions/{session_id}", response_model=SessionClearedResponse)
def clear_session(session_id: str, db: Session = Depends(get_db)):
    persistence_for(db, session_id).clear()
    return SessionClearedResponse(session_id=session_id, cleared=True)
