from __future__ import annotations

import logging
from dataclasses import dataclass

from app.projekt.modules.customers.models import Customer
from app.projekt.repository import Repository

logger = logging.getLogger(__name__)


def name_key(name: str | None) -> str:
    """
    Per-character uppercase, skipping characters whose uppercase is longer
    than one character (ß, ligatures), so "straße" never equals "STRASSE".
    """
    out = []
    for ch in name or "":
        upper = ch.upper()
        out.append(upper if len(upper) == 1 else ch)
    return "".join(out)


@dataclass(frozen=True)
class CustomerService:
    customers: Repository[Customer]

    def get_all_customers(self) -> list[Customer]:
        return self.customers.get_all()

    def get_customer_by_name(self, name: str) -> Customer | None:
        """
        Case-insensitive exact match over all customers; first (lowest id) wins.
        Linear scan, fine for the handful of rows a console tool keeps.
        """
        wanted = name_key(name)
        for customer in self.customers.get_all():
            if name_key(customer.name) == wanted:
                return customer
        return None

    def create_customer(self, name: str) -> Customer:
        """Always inserts; duplicate names are allowed."""
        customer = Customer(name=name)
        self.customers.add(customer)
        logger.info("Created customer id=%s name=%r", customer.id, customer.name)
        return customer
