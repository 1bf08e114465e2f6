"""Payment settlement port and the simulated gateway used by the storefront.

There is no real payment processor: ``SimulatedPaymentGateway`` settles
every order immediately as paid, whatever the payment method.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

from ordering.order.order import PaymentStatus


@dataclass(frozen=True)
class SettlementResult:
    """Result of a settlement attempt."""

    payment_status: str
    reference: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def settle(self, order_number: str, amount: float, payment_method: str) -> SettlementResult:
        """Collect ``amount`` for an order."""
        ...


class SimulatedPaymentGateway(PaymentGateway):
    """Always reports the payment as collected."""

    def settle(self, order_number: str, amount: float, payment_method: str) -> SettlementResult:
        return SettlementResult(
            payment_status=PaymentStatus.PAID.value,
            reference=f"sim_{uuid4().hex[:12]}",
        )
