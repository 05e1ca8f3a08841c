"""Payment and notification provider interfaces."""

from yardroute.integrations.base import (
    ChargeResult,
    NotificationResult,
    PaymentGateway,
    Notifier,
    UnconfiguredPaymentGateway,
    UnconfiguredNotifier,
    call_with_timeout,
)

__all__ = [
    "ChargeResult",
    "NotificationResult",
    "PaymentGateway",
    "Notifier",
    "UnconfiguredPaymentGateway",
    "UnconfiguredNotifier",
    "call_with_timeout",
]
