"""Order confirmation port — abstract interface for the email collaborator.

Rendering and delivering the message belong to the collaborator. From the
ordering core's point of view the call is fire-and-forget: its result is
reported back to the customer but never decides whether an order exists.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a confirmation send attempt."""

    success: bool
    message: str = ""
    message_id: str | None = None


class OrderConfirmationPort(ABC):
    """Abstract interface for order confirmation adapters."""

    @abstractmethod
    def send_order_confirmation(self, email: str, order) -> DeliveryResult:
        """Send the confirmation for ``order`` to ``email``."""
        ...
