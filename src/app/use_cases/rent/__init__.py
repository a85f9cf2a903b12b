"""Rent charge use cases"""
from .due_dates import calculate_next_due_date, add_months
from .errors import ErrorCode, TenantNotAssignable
from .generate_payment import GeneratePaymentForTenant
from .check_missing_payments import CheckMissingPayments
from .generate_upcoming_payments import GenerateUpcomingPayments
from .schedule_next_payment import ScheduleNextPayment
from .update_payment_status import UpdatePaymentStatus
from .list_tenant_payments import ListTenantPayments
from .dtos import (
    GenerationAction,
    PaymentDTO,
    GeneratePaymentCommandDTO,
    GeneratedPaymentDTO,
    PaymentGenerationResultDTO,
    CheckMissingPaymentsCommandDTO,
    MissingPaymentsReportDTO,
    GenerateUpcomingPaymentsCommandDTO,
    UpcomingPaymentsReportDTO,
    ScheduleNextPaymentCommandDTO,
    NextPaymentDTO,
    UpdatePaymentStatusCommandDTO,
    PaymentStatusUpdateDTO,
    TenantPaymentsDTO,
    payment_to_dto,
)

__all__ = [
    "calculate_next_due_date",
    "add_months",
    "ErrorCode",
    "TenantNotAssignable",
    "GeneratePaymentForTenant",
    "CheckMissingPayments",
    "GenerateUpcomingPayments",
    "ScheduleNextPayment",
    "UpdatePaymentStatus",
    "ListTenantPayments",
    "GenerationAction",
    "PaymentDTO",
    "GeneratePaymentCommandDTO",
    "GeneratedPaymentDTO",
    "PaymentGenerationResultDTO",
    "CheckMissingPaymentsCommandDTO",
    "MissingPaymentsReportDTO",
    "GenerateUpcomingPaymentsCommandDTO",
    "UpcomingPaymentsReportDTO",
    "ScheduleNextPaymentCommandDTO",
    "NextPaymentDTO",
    "UpdatePaymentStatusCommandDTO",
    "PaymentStatusUpdateDTO",
    "TenantPaymentsDTO",
    "payment_to_dto",
]
