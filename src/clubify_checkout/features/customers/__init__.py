"""Customer records, history and relationships."""

from .entities import CustomerData
from .module import CustomersModule
from .repositories import CustomerRepository
from .services import CustomerService

__all__ = ["CustomerData", "CustomersModule", "CustomerRepository", "CustomerService"]
