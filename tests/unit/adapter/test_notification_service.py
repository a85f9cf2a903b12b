"""Unit tests for sweep report notification services"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from src.app.use_cases.rent.dtos import (
    GenerationAction,
    MissingPaymentsReportDTO,
    PaymentGenerationResultDTO,
)


@pytest.fixture
def report():
    detail = PaymentGenerationResultDTO(
        tenant_id="tenant_2",
        tenant_name="Grace Hopper",
        due_date=date(2024, 3, 15),
        action=GenerationAction.ERROR,
        error_code="TENANT_NOT_ASSIGNABLE",
        error="Tenant not found or has no assigned property: tenant_2",
    )
    return MissingPaymentsReportDTO(
        run_date=date(2024, 3, 15),
        checked=3,
        generated=2,
        existing=0,
        errors=1,
        results=[detail],
        error_details=[detail],
    )


def mock_http_client(response=None, error=None):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.post = AsyncMock(return_value=response, side_effect=error)
    return client


@pytest.mark.asyncio
class TestLoggingNotificationService:
    async def test_always_succeeds(self, report):
        assert await LoggingNotificationService().send_sweep_report(report) is True


@pytest.mark.asyncio
class TestWebhookNotificationService:
    """Test webhook delivery"""

    @patch("src.adapter.services.notification_service.httpx.AsyncClient")
    async def test_posts_error_details(self, mock_client_class, report):
        """
        Given: A sweep report with one failed tenant
        When: send_sweep_report is called
        Then: The counts and error details are posted as JSON
        """
        # Arrange
        response = MagicMock()
        response.raise_for_status = MagicMock()
        client = mock_http_client(response=response)
        mock_client_class.return_value = client
        service = WebhookNotificationService("https://hooks.example.com/rent")

        # Act
        success = await service.send_sweep_report(report)

        # Assert
        assert success is True
        url = client.post.call_args[0][0]
        payload = client.post.call_args[1]["json"]
        assert url == "https://hooks.example.com/rent"
        assert payload["type"] == "missing_payment_sweep"
        assert payload["run_date"] == "2024-03-15"
        assert payload["errors"] == 1
        assert payload["error_details"][0]["tenant_id"] == "tenant_2"
        assert payload["error_details"][0]["due_date"] == "2024-03-15"

    @patch("src.adapter.services.notification_service.httpx.AsyncClient")
    async def test_http_error_returns_false(self, mock_client_class, report):
        """
        Given: The webhook is unreachable
        When: send_sweep_report is called
        Then: False is returned
        """
        mock_client_class.return_value = mock_http_client(error=httpx.ConnectError("refused"))
        service = WebhookNotificationService("https://hooks.example.com/rent")

        assert await service.send_sweep_report(report) is False


@pytest.mark.asyncio
class TestCompositeNotificationService:
    async def test_succeeds_if_any_service_succeeds(self, report):
        failing = MagicMock()
        failing.send_sweep_report = AsyncMock(side_effect=RuntimeError("down"))
        working = MagicMock()
        working.send_sweep_report = AsyncMock(return_value=True)

        service = CompositeNotificationService([failing, working])

        assert await service.send_sweep_report(report) is True
        working.send_sweep_report.assert_called_once_with(report)


class TestCreateNotificationService:
    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service("https://hooks.example.com/rent")

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)
