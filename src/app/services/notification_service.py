"""Notification Service Interface

Defines the contract for reporting missing payment sweep failures to operators.
"""

from abc import ABC, abstractmethod
from src.app.use_cases.rent.dtos import MissingPaymentsReportDTO


class NotificationService(ABC):
    """
    Abstract notification service for sending sweep reports

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_sweep_report(self, report: MissingPaymentsReportDTO) -> bool:
        """
        Send a missing payment sweep report

        Args:
            report: Sweep report including per-tenant error details

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
