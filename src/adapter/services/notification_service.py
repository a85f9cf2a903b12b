"""Notification Service Implementations

Provides concrete implementations for reporting missing payment sweeps.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.app.use_cases.rent.dtos import MissingPaymentsReportDTO

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs sweep reports

    Useful for development and testing, or as a fallback.
    """

    async def send_sweep_report(self, report: MissingPaymentsReportDTO) -> bool:
        """
        Log sweep report with one line per failed tenant

        Args:
            report: MissingPaymentsReportDTO to report

        Returns:
            Always True (logging never fails)
        """
        logger.warning(
            f"[MISSING PAYMENT SWEEP] Date: {report.run_date.isoformat()}, "
            f"Checked: {report.checked}, Generated: {report.generated}, "
            f"Existing: {report.existing}, Errors: {report.errors}"
        )
        for detail in report.error_details:
            logger.warning(
                f"[MISSING PAYMENT SWEEP] Tenant: {detail.tenant_id} ({detail.tenant_name}), "
                f"Due: {detail.due_date.isoformat()}, Code: {detail.error_code}, "
                f"Error: {detail.error}"
            )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that posts sweep reports to an HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST reports to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_sweep_report(self, report: MissingPaymentsReportDTO) -> bool:
        """
        Send sweep report via webhook

        Args:
            report: MissingPaymentsReportDTO to report

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "missing_payment_sweep",
            "run_date": report.run_date.isoformat(),
            "checked": report.checked,
            "generated": report.generated,
            "existing": report.existing,
            "errors": report.errors,
            "error_details": [
                detail.model_dump(mode="json") for detail in report.error_details
            ],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Sweep report for {report.run_date.isoformat()} sent to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send sweep report for {report.run_date.isoformat()}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_sweep_report(self, report: MissingPaymentsReportDTO) -> bool:
        """
        Send sweep report to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_sweep_report(report):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
