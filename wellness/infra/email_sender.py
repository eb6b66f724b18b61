"""
Email delivery through the Resend HTTP API.

One request per recipient; ``send_many`` fans the requests out concurrently
and reports per-recipient success or failure. Nothing is retried.
"""
import asyncio
import base64
import logging
from typing import Dict, List, Optional

import httpx

from wellness.domain.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com"


class DeliveryReport:
    def __init__(self, sent: List[str], failed: Dict[str, str]):
        self.sent = sent
        self.failed = failed

    @property
    def sent_count(self) -> int:
        return len(self.sent)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def __repr__(self) -> str:
        return f"DeliveryReport(sent={self.sent_count}, failed={self.failed_count})"


class ResendEmailSender:
    def __init__(self, api_key: str, from_address: str,
                 client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.api_key = api_key
        self.from_address = from_address
        self._client = client
        self._timeout = timeout

    def _payload(self, to_email: str, subject: str, html: str, attachments: Optional[Dict[str, bytes]]) -> dict:
        payload = {
            "from": self.from_address,
            "to": [to_email],
            "subject": subject,
            "html": html,
        }
        if attachments:
            payload["attachments"] = [
                {"filename": name, "content": base64.b64encode(content).decode("ascii")}
                for name, content in attachments.items()
            ]
        return payload

    async def send(self, client: httpx.AsyncClient, to_email: str, subject: str, html: str,
                   attachments: Optional[Dict[str, bytes]] = None) -> str:
        """Send one email; returns the provider message id or raises EmailDeliveryError."""
        try:
            response = await client.post(
                f"{RESEND_API_URL}/emails",
                json=self._payload(to_email, subject, html, attachments),
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(to_email, f"request failed: {e}") from e
        if response.status_code >= 400:
            raise EmailDeliveryError(to_email, f"HTTP {response.status_code}: {response.text}")
        try:
            body = response.json()
        except ValueError:
            # accepted; the id is informational only
            return ""
        return body.get("id", "") if isinstance(body, dict) else ""

    async def send_many(self, recipients: List[str], subject: str, html: str,
                        attachments: Optional[Dict[str, bytes]] = None) -> DeliveryReport:
        if self._client is not None:
            return await self._fan_out(self._client, recipients, subject, html, attachments)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._fan_out(client, recipients, subject, html, attachments)

    async def _fan_out(self, client, recipients, subject, html, attachments) -> DeliveryReport:
        results = await asyncio.gather(
            *(self.send(client, email, subject, html, attachments) for email in recipients),
            return_exceptions=True,
        )
        sent: List[str] = []
        failed: Dict[str, str] = {}
        for email, result in zip(recipients, results):
            if isinstance(result, Exception):
                logger.error("Email to %s failed: %s", email, result)
                failed[email] = str(result)
            else:
                sent.append(email)
        logger.info("Email sending complete: %d successful, %d failed", len(sent), len(failed))
        return DeliveryReport(sent, failed)
