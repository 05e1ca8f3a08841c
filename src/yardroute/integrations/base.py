"""Interfaces for the payment and notification providers.

The core only ever asks a provider for one thing: charge a stored payment
method, or deliver one rendered text message. Provider SDK details live in
implementations of these interfaces.
"""

import concurrent.futures
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from yardroute.domain.errors import ExternalServiceError

T = TypeVar("T")


@dataclass(frozen=True)
class ChargeResult:
    """Outcome of an off-session charge request."""

    success: bool
    external_ref: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a message delivery request."""

    success: bool
    external_ref: Optional[str] = None
    reason: Optional[str] = None


class PaymentGateway(ABC):
    """Payment provider able to charge a saved payment method."""

    @abstractmethod
    def charge_off_session(
        self,
        customer_ref: Optional[str],
        payment_method_ref: str,
        amount_minor_units: int,
        description: str = "",
    ) -> ChargeResult:
        """Request a charge without the customer present."""
        pass


class Notifier(ABC):
    """Message provider (SMS)."""

    @abstractmethod
    def send_message(self, to: str, text: str) -> NotificationResult:
        """Deliver an already rendered message."""
        pass


class UnconfiguredPaymentGateway(PaymentGateway):
    """Gateway used when no payment provider is set up; every charge fails."""

    def charge_off_session(
        self,
        customer_ref: Optional[str],
        payment_method_ref: str,
        amount_minor_units: int,
        description: str = "",
    ) -> ChargeResult:
        return ChargeResult(success=False, reason="Payment provider not configured")


class UnconfiguredNotifier(Notifier):
    """Notifier used when no SMS provider is set up; every send fails."""

    def send_message(self, to: str, text: str) -> NotificationResult:
        return NotificationResult(success=False, reason="SMS provider not configured")


def call_with_timeout(func: Callable[..., T], timeout: Optional[float], *args, **kwargs) -> T:
    """Run func, giving up after timeout seconds.

    The call keeps running in a worker thread after a timeout and is never
    joined; its result is discarded. A provider call that completes late has
    still taken effect (a late successful charge leaves its invoice unpaid with
    no payment reference), so callers must reconcile timed-out calls with the
    provider rather than retry them blindly.

    Raises:
        ExternalServiceError: If func does not finish in time
    """
    if timeout is None:
        return func(*args, **kwargs)
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(func, *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError as e:
            raise ExternalServiceError(f"Call did not finish within {timeout:g}s") from e
    finally:
        executor.shutdown(wait=False)
