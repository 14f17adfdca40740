from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from alert_deleter.exceptions import AlertSourceError
from alert_deleter.source import AlertmanagerSource, AlertSource, StaticAlertSource

URL = "http://alertmanager:9093/api/v2/alerts"


def make_mock_response(status_code: int, json_data: object) -> MagicMock:
    """Create a mock httpx.Response with proper request object."""
    mock = MagicMock(spec=httpx.Response)
    mock.status_code = status_code
    mock.json.return_value = json_data
    mock.request = httpx.Request("GET", URL)

    def raise_for_status() -> None:
        if status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {status_code}",
                request=mock.request,
                response=mock,
            )

    mock.raise_for_status = raise_for_status
    return mock


ALERTS = [
    {
        "fingerprint": "f1",
        "status": {"state": "active"},
        "labels": {"alertname": "HighMemory", "pod": "api-0", "namespace": "prod"},
    },
    {
        "fingerprint": "f2",
        "status": {"state": "suppressed"},
        "labels": {"alertname": "DiskFull"},
    },
]


class TestAlertmanagerSource:
    def test_implements_protocol(self) -> None:
        assert isinstance(AlertmanagerSource(URL), AlertSource)

    def test_initialization(self) -> None:
        source = AlertmanagerSource(URL, timeout=5.0)
        assert source.url == URL
        assert source.timeout == 5.0

    @pytest.mark.asyncio
    async def test_fetch_parses_alerts(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_mock_response(200, ALERTS)
            alerts = await AlertmanagerSource(URL).fetch()

        assert [a.fingerprint for a in alerts] == ["f1", "f2"]
        assert alerts[0].labels.pod == "api-0"
        assert alerts[1].status.state == "suppressed"
        assert mock_get.call_args.args[0] == URL

    @pytest.mark.asyncio
    async def test_fetch_empty_list(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_mock_response(200, [])
            assert await AlertmanagerSource(URL).fetch() == []

    @pytest.mark.asyncio
    async def test_fetch_raises_on_error_status(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_mock_response(503, {"error": "unavailable"})

            with pytest.raises(AlertSourceError, match="HTTP 503") as exc_info:
                await AlertmanagerSource(URL).fetch()

        assert exc_info.value.url == URL

    @pytest.mark.asyncio
    async def test_fetch_raises_on_transport_error(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ConnectTimeout("timed out")

            with pytest.raises(AlertSourceError, match="timed out"):
                await AlertmanagerSource(URL).fetch()

    @pytest.mark.asyncio
    async def test_fetch_raises_on_invalid_json(self) -> None:
        response = make_mock_response(200, None)
        response.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response

            with pytest.raises(AlertSourceError, match="invalid JSON"):
                await AlertmanagerSource(URL).fetch()

    @pytest.mark.asyncio
    async def test_fetch_raises_when_payload_is_not_a_list(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_mock_response(200, {"data": ALERTS})

            with pytest.raises(AlertSourceError, match="JSON array"):
                await AlertmanagerSource(URL).fetch()

    @pytest.mark.asyncio
    async def test_fetch_raises_on_malformed_alert(self) -> None:
        payload = [ALERTS[0], {"fingerprint": "bad", "labels": {"alertname": "X"}}]

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_mock_response(200, payload)

            with pytest.raises(AlertSourceError, match="Malformed alert"):
                await AlertmanagerSource(URL).fetch()

    @pytest.mark.asyncio
    async def test_fetch_raises_on_invalid_url(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.InvalidURL("Invalid IPv6 address")

            with pytest.raises(AlertSourceError, match="Invalid alert source URL") as exc_info:
                await AlertmanagerSource("http://[zz]").fetch()

        assert exc_info.value.url == "http://[zz]"


class TestStaticAlertSource:
    def test_implements_protocol(self) -> None:
        assert isinstance(StaticAlertSource([]), AlertSource)

    @pytest.mark.asyncio
    async def test_returns_same_alerts_every_poll(self) -> None:
        from alert_deleter.domain import Alert

        alerts = [Alert.from_dict(a) for a in ALERTS]
        source = StaticAlertSource(alerts)

        assert await source.fetch() == alerts
        assert await source.fetch() == alerts
        assert source.fetch_count == 2
