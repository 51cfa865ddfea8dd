"""POST /v1/quotes - quote requests forwarded to the lead webhook"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from tradesman_finance.api.dependencies import get_lead_client, get_persistence, get_request_id, get_session_id
from tradesman_finance.api.v1.schemas import QuoteRequest, QuoteResponse, QuoteSummary
from tradesman_finance.domain.exceptions import UnknownCalculatorError
from tradesman_finance.domain.persistence import CalculatorPersistence
from tradesman_finance.domain.registry import get_calculator
from tradesman_finance.infrastructure.clients.leads import LeadWebhookClient

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse)
async def request_quote(
    request_body: QuoteRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    session_id: str = Depends(get_session_id),
    persistence: CalculatorPersistence = Depends(get_persistence),
    lead_client: LeadWebhookClient = Depends(get_lead_client),
):
    """
    Record a quote request and forward it as a lead.

    The headline figures of the session's saved calculation, when there is
    one, travel with the lead. Delivery happens after the response is sent.
    """
    request_id = get_request_id(request)

    try:
        spec = get_calculator(request_body.calculator)
    except UnknownCalculatorError as e:
        raise HTTPException(status_code=404, detail=str(e))

    summary = None
    saved = persistence.load(spec.storage_key)
    if saved is not None:
        try:
            summary = QuoteSummary(**asdict(spec.summarize(saved["results"])))
        except (KeyError, TypeError) as e:
            logging.warning(f"Saved calculation has no headline figures: {e}", extra={"request_id": request_id})

    lead = {
        "form_type": "calculator",
        "name": request_body.name,
        "email": request_body.email,
        "phone": request_body.phone,
        "business_name": request_body.business_name,
        "trade_type": request_body.trade_type,
        "message": request_body.message,
        "page_url": request_body.page_url,
        "calculator": spec.key,
        "session_id": session_id,
        "finance_type": summary.finance_type if summary else None,
        "amount": summary.amount if summary else None,
        "monthly_payment": summary.monthly_payment if summary else None,
    }

    if lead_client.webhook_url:
        background_tasks.add_task(lead_client.deliver_in_background, lead, request_id)
        lead_forwarding = "scheduled"
    else:
        logging.warning("Quote received with lead forwarding disabled", extra={"request_id": request_id})
        lead_forwarding = "disabled"

    logging.info(
        "Quote requested",
        extra={"request_id": request_id, "session_id": session_id, "calculator": spec.key},
    )

    return QuoteResponse(
        calculator=spec.key,
        session_id=session_id,
        summary=summary,
        lead_forwarding=lead_forwarding,
    )
