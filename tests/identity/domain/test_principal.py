"""Tests for building the request principal from proxy headers."""

import pytest
from fastapi import HTTPException

from identity.customer.customer import CustomerRole
from identity.customer.principal import current_admin, current_customer


class TestCurrentCustomer:
    def test_builds_customer(self):
        customer = current_customer("user-001", "ayesha@example.com", "Ayesha", "user")
        assert customer.user_id == "user-001"
        assert customer.role == CustomerRole.USER

    def test_role_is_case_insensitive(self):
        assert current_customer("admin-001", "admin@example.com", "", "ADMIN").is_admin

    @pytest.mark.parametrize(
        ("user_id", "email", "role"),
        [("", "a@example.com", "user"), ("u1", "", "user"), ("u1", "bad-email", "user"), ("u1", "a@example.com", "owner")],
    )
    def test_rejects_missing_or_invalid_headers(self, user_id, email, role):
        with pytest.raises(HTTPException) as exc:
            current_customer(user_id, email, "", role)
        assert exc.value.status_code == 401


class TestCurrentAdmin:
    def test_admin_passes(self):
        assert current_admin("admin-001", "admin@example.com", "", "admin").is_admin

    def test_customer_is_forbidden(self):
        with pytest.raises(HTTPException) as exc:
            current_admin("user-001", "ayesha@example.com", "", "user")
        assert exc.value.status_code == 403
