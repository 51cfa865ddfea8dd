"""Calculator endpoints - list, configuration tables, and run-and-save"""

import logging
import time
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from tradesman_finance.api.dependencies import get_persistence, get_policy, get_request_id, get_session_id
from tradesman_finance.api.v1.schemas import (
    REQUEST_SCHEMAS,
    CalculationResponse,
    CalculatorConfigResponse,
    CalculatorListItem,
    CalculatorListResponse,
)
from tradesman_finance.domain.exceptions import UnknownCalculatorError
from tradesman_finance.domain.input_ranges import clamp_inputs
from tradesman_finance.domain.persistence import CalculatorPersistence
from tradesman_finance.domain.policy import FinancePolicy
from tradesman_finance.domain.registry import CALCULATORS, CalculatorSpec, get_calculator
from tradesman_finance.infrastructure.observability.logging import log_calculation
from tradesman_finance.infrastructure.observability.metrics import record_calculation
from tradesman_finance.utils.serialization import to_plain

router = APIRouter()


def _resolve(key: str) -> CalculatorSpec:
    try:
        return get_calculator(key)
    except UnknownCalculatorError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/calculators", response_model=CalculatorListResponse)
def list_calculators():
    return CalculatorListResponse(
        calculators=[
            CalculatorListItem(key=spec.key, title=spec.title, storage_key=spec.storage_key)
            for spec in CALCULATORS.values()
        ]
    )


@router.get("/calculators/{key}/config", response_model=CalculatorConfigResponse)
def get_calculator_config(key: str):
    """Input ranges, defaults and select options for one calculator's form"""
    spec = _resolve(key)
    return CalculatorConfigResponse(
        calculator=spec.key,
        title=spec.title,
        fields={name: asdict(field_range) for name, field_range in spec.ranges.items()},
    )


@router.post("/calculators/{key}", response_model=CalculationResponse)
def run_calculator(
    key: str,
    request: Request,
    response: Response,
    body: Optional[Dict[str, Any]] = Body(None),
    session_id: str = Depends(get_session_id),
    policy: FinancePolicy = Depends(get_policy),
    persistence: CalculatorPersistence = Depends(get_persistence),
):
    """
    Run a calculator and save its inputs and results for the session.

    Flow:
    1. Validate the body against the calculator's request schema
    2. Clamp numeric inputs into the configured ranges
    3. Calculate
    4. Save {inputs, results} under the calculator's storage key
    5. Record metrics and logs
    """
    start_time = time.time()
    request_id = get_request_id(request)
    spec = _resolve(key)

    try:
        validated = REQUEST_SCHEMAS[key].model_validate(body or {})
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))

    try:
        inputs = spec.inputs_type(**clamp_inputs(spec.ranges, validated.model_dump()))
        results = spec.calculate(inputs, policy)
        persistence.save(spec.storage_key, inputs, results)

        plain_inputs = to_plain(inputs)
        plain_results = to_plain(results)
        summary = spec.summarize(plain_results)

        duration_ms = (time.time() - start_time) * 1000
        record_calculation(key, tier=summary.tier, recommended_product=summary.recommended_product)
        log_calculation(request_id, session_id, key, duration_ms, summary.amount, summary.monthly_payment)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "calculator": key})
        raise HTTPException(status_code=500, detail="Internal server error")

    response.headers["X-Session-ID"] = session_id
    return CalculationResponse(
        calculator=key,
        session_id=session_id,
        inputs=plain_inputs,
        results=plain_results,
    )
