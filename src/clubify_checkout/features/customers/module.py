"""Customers module façade."""

from ...core.module import BaseModule
from .repositories import CustomerRepository
from .services import CustomerService


class CustomersModule(BaseModule):
    name = "customers"

    def repository(self) -> CustomerRepository:
        return self._component("repository", lambda: self._build_repository(CustomerRepository))

    def customers(self) -> CustomerService:
        return self._component("customer_service", lambda: self._build_service(CustomerService, self.repository()))
