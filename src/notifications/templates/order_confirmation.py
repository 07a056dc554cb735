"""Order confirmation template — rendered when checkout places an order."""

from shared.money import format_money


class OrderConfirmationTemplate:
    @staticmethod
    def render(order) -> dict:
        currency = order.currency
        lines = "\n".join(
            f"  {item.quantity} x {item.name or item.product_id}"
            f"{f' ({item.size})' if item.size else ''}"
            f"{f' - {item.color}' if item.color else ''}"
            f"  {format_money(item.line_total, currency)}"
            for item in order.items
        )
        shipping = "Free" if order.pricing.free_shipping else format_money(order.pricing.shipping_cost, currency)
        return {
            "subject": f"Order Confirmation #{order.id}",
            "body": (
                f"Thank you for your order, {order.user_name or order.user_email}!\n\n"
                f"{lines}\n\n"
                f"Subtotal: {format_money(order.pricing.subtotal, currency)}\n"
                f"Shipping: {shipping}\n"
                f"Tax: {format_money(order.pricing.tax_amount, currency)}\n"
                f"Total: {format_money(order.pricing.total, currency)}\n\n"
                "We'll let you know once your order ships."
            ),
        }
