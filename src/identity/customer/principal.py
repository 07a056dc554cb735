"""Request principal — the customer as asserted by the upstream auth proxy.

Authentication happens in front of this service. The proxy forwards the
signed-in user as ``X-User-*`` headers; these dependencies turn them into a
``Customer`` and reject requests that carry none.
"""

from fastapi import Header, HTTPException
from pydantic import ValidationError

from identity.customer.customer import Customer, CustomerRole


def current_customer(
    x_user_id: str = Header(default=""),
    x_user_email: str = Header(default=""),
    x_user_name: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Customer:
    if not x_user_id or not x_user_email:
        raise HTTPException(status_code=401, detail="Sign in required")
    try:
        return Customer(
            user_id=x_user_id,
            email=x_user_email,
            name=x_user_name,
            role=CustomerRole(x_user_role.lower()),
        )
    except (ValidationError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid principal headers") from None


def current_admin(
    x_user_id: str = Header(default=""),
    x_user_email: str = Header(default=""),
    x_user_name: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Customer:
    customer = current_customer(x_user_id, x_user_email, x_user_name, x_user_role)
    if not customer.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return customer
