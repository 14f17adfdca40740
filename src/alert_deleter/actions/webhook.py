import logging

import httpx

from alert_deleter.domain import Alert
from alert_deleter.exceptions import MissingLabelError, RemediationError

logger = logging.getLogger(__name__)


class WebhookAction:
    """Forwards an alert to the URL in its ``webhook_url`` label.

    The body is the alert in the same JSON shape the alert source served.
    Any non-2xx answer counts as a failure. There is no retry; a later poll
    forwards the alert again if it is still firing.
    """

    name: str = "webhook"

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    async def execute(self, alert: Alert) -> None:
        url = alert.labels.webhook_url
        if not url:
            raise MissingLabelError(alert.fingerprint, ("webhook_url",))

        await self.forward(url, alert)

    async def forward(self, url: str, alert: Alert) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=alert.to_dict())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Webhook {url} returned HTTP {e.response.status_code}"
            raise RemediationError(msg, fingerprint=alert.fingerprint) from e
        except httpx.HTTPError as e:
            msg = f"Failed to send webhook to {url}: {e}"
            raise RemediationError(msg, fingerprint=alert.fingerprint) from e
        except httpx.InvalidURL as e:
            msg = f"Invalid webhook URL {url}: {e}"
            raise RemediationError(msg, fingerprint=alert.fingerprint) from e

        logger.info("Sent webhook for alert %s", alert.fingerprint)
