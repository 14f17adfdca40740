import logging
from typing import Any

import httpx

from alert_deleter.domain import Alert
from alert_deleter.exceptions import AlertSourceError

logger = logging.getLogger(__name__)


class AlertmanagerSource:
    """Polls an Alertmanager-compatible endpoint for the current alert list.

    The endpoint must answer ``GET <url>`` with a JSON array of alerts shaped
    ``{fingerprint, status: {state}, labels: {...}}``, as served by
    ``/api/v2/alerts``.

    A poll is a single request with no internal retry; the caller polls
    again on its next tick.
    """

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    async def fetch(self) -> list[Alert]:
        """Fetch and decode the current alerts.

        Raises:
            AlertSourceError: On transport errors, non-2xx responses or a
                payload that is not a list of well-formed alerts.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url, headers={"Accept": "application/json"})
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AlertSourceError(
                f"Alert source returned HTTP {e.response.status_code}", url=self.url
            ) from e
        except httpx.HTTPError as e:
            raise AlertSourceError(f"Alert source request failed: {e}", url=self.url) from e
        except httpx.InvalidURL as e:
            raise AlertSourceError(f"Invalid alert source URL: {e}", url=self.url) from e
        except ValueError as e:
            raise AlertSourceError(f"Alert source returned invalid JSON: {e}", url=self.url) from e

        alerts = self._parse(data)
        logger.debug("Fetched %d alerts from %s", len(alerts), self.url)
        return alerts

    def _parse(self, data: Any) -> list[Alert]:
        if not isinstance(data, list):
            raise AlertSourceError(
                f"Expected a JSON array of alerts, got {type(data).__name__}", url=self.url
            )

        try:
            return [Alert.from_dict(item) for item in data]
        except ValueError as e:
            raise AlertSourceError(f"Malformed alert in payload: {e}", url=self.url) from e
