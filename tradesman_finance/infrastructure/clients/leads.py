"""Lead webhook client with exponential backoff retry logic"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from tradesman_finance.config import settings
from tradesman_finance.domain.exceptions import LeadWebhookError
from tradesman_finance.infrastructure.observability.metrics import (
    lead_webhook_failure_counter,
    lead_webhook_latency_histogram,
)

logger = logging.getLogger(__name__)


class LeadWebhookClient:
    """Client for forwarding quote requests to the lead capture webhook (Zapier / CRM)"""

    def __init__(self, webhook_url: Optional[str] = None):
        self.webhook_url = webhook_url or settings.lead_webhook_url
        self.source = settings.lead_source
        self.timeout = settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base

    def build_payload(self, lead: Dict[str, Any]) -> Dict[str, Any]:
        """Stamp the lead with its source site and submission time"""
        return {
            **lead,
            "source": self.source,
            "submitted_at": datetime.now(timezone.utc).isoformat(),
        }

    async def send_lead(self, lead: Dict[str, Any]) -> bool:
        """
        Send a lead to the webhook with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1)
        - Retries on 4xx/5xx responses and network failures
        - Tracks latency histogram and failure counter

        Returns:
            False when no webhook URL is configured and the send was skipped

        Raises:
            LeadWebhookError: every attempt failed
        """
        if not self.webhook_url:
            logger.warning("No lead webhook URL configured; lead not forwarded")
            return False

        payload = self.build_payload(lead)
        attempt = 0
        async with httpx.AsyncClient() as client:
            while attempt < self.max_retries:
                try:
                    with lead_webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload, timeout=self.timeout)
                        response.raise_for_status()
                        return True

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    lead_webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise LeadWebhookError(f"Lead webhook failed after {attempt} attempts: {e}") from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

        # max_retries <= 0
        return False

    async def deliver_in_background(self, lead: Dict[str, Any], request_id: str) -> None:
        """Background task wrapper: delivery failures are logged, not raised to the client"""
        try:
            await self.send_lead(lead)
        except LeadWebhookError as e:
            logger.error(f"Lead webhook delivery failed: {e}", extra={"request_id": request_id})
