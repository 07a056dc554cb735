"""Fake email adapter — records order confirmations for testing."""

from uuid import uuid4

from notifications.channel.email_port import DeliveryResult, OrderConfirmationPort
from notifications.templates.order_confirmation import OrderConfirmationTemplate


class FakeEmailAdapter(OrderConfirmationPort):
    """Email adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_error = False

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_error: bool = False,
    ):
        """Configure the fake adapter behavior for testing.

        ``raise_error`` simulates a transport outage that surfaces as an
        exception rather than a failed result.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    def send_order_confirmation(self, email: str, order) -> DeliveryResult:
        if self.raise_error:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return DeliveryResult(success=False, message=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        content = OrderConfirmationTemplate.render(order)
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": email,
                "subject": content["subject"],
                "body": content["body"],
                "order_id": order.id,
                "total": order.pricing.total,
            }
        )
        return DeliveryResult(success=True, message="Confirmation email sent", message_id=message_id)

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_error = False
