"""Customer directory — read access to registered customers for reporting."""

from identity.customer.customer import Customer

_directory_instance = None


class InMemoryCustomerDirectory:
    def __init__(self, customers=()) -> None:
        self._customers: dict[str, Customer] = {customer.user_id: customer for customer in customers}

    def add(self, customer: Customer) -> None:
        self._customers[customer.user_id] = customer

    def list_customers(self) -> list[Customer]:
        return list(self._customers.values())


def get_customer_directory() -> InMemoryCustomerDirectory:
    global _directory_instance
    if _directory_instance is None:
        _directory_instance = InMemoryCustomerDirectory()
    return _directory_instance


def reset_customer_directory():
    global _directory_instance
    _directory_instance = None
