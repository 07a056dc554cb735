"""Customer principal supplied by the authentication collaborator.

The core never authenticates anyone. It receives an already-authenticated
``Customer`` and uses it only to attribute orders (``user_id``, ``email``,
``name``) and, in analytics, to count sign-ups.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from identity.shared.email import validate_email_address


class CustomerRole(Enum):
    USER = "user"
    ADMIN = "admin"


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    email: str
    name: str = ""
    role: CustomerRole = CustomerRole.USER
    created_at: datetime | None = None

    @field_validator("email")
    @classmethod
    def _email_must_be_valid(cls, value):
        return validate_email_address(value)

    @property
    def display_name(self) -> str:
        return self.name or self.email.split("@")[0]

    @property
    def is_admin(self) -> bool:
        return self.role == CustomerRole.ADMIN
