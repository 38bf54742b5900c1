"""Customer service."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ....core.data import BulkResult
from ....core.exceptions import ConflictError, ValidationError
from ....core.service import RepositoryService
from ..entities import CUSTOMER_STATUSES, CustomerData
from ..repositories import CustomerRepository

logger = logging.getLogger(__name__)


def _normalize(data: Mapping[str, Any]) -> Dict[str, Any]:
    payload = dict(data)
    if isinstance(payload.get("email"), str):
        payload["email"] = payload["email"].strip().lower()
    if isinstance(payload.get("name"), str):
        payload["name"] = payload["name"].strip()
    return payload


class CustomerService(RepositoryService):
    service_name = "customer"
    repository: CustomerRepository

    async def create(self, data: Mapping[str, Any]) -> CustomerData:
        """Create a customer; an email already on file is a conflict."""
        customer = CustomerData.from_dict({"status": "active", **_normalize(data)})
        if await self.repository.email_exists(customer.email):
            raise ConflictError(
                f"Customer with email {customer.email} already exists",
                details={"email": customer.email},
            )
        if self.settings.organization_id and not customer.organization_id:
            customer = customer.with_changes(organization_id=self.settings.organization_id)
        return await self.execute_with_metrics("create", self.repository.create, customer)

    async def find_or_create(self, data: Mapping[str, Any]) -> CustomerData:
        payload = _normalize(data)
        if payload.get("email"):
            existing = await self.repository.find_by_email(payload["email"])
            if existing is not None:
                return existing
        return await self.create(payload)

    async def get(self, customer_id: str) -> Optional[CustomerData]:
        return await self.repository.find(customer_id)

    async def get_by_email(self, email: str) -> Optional[CustomerData]:
        return await self.repository.find_by_email(email)

    async def update(self, customer_id: str, changes: Mapping[str, Any]) -> CustomerData:
        payload = _normalize(changes)
        CustomerData.validate_patch(payload)
        if payload.get("email"):
            owner = await self.repository.find_by_email(payload["email"])
            if owner is not None and str(owner.id) != str(customer_id):
                raise ConflictError(
                    f"Email {payload['email']} belongs to another customer",
                    details={"email": payload["email"]},
                )
        return await self.execute_with_metrics("update", self.repository.update, customer_id, payload)

    async def update_status(self, customer_id: str, status: str) -> bool:
        if status not in CUSTOMER_STATUSES:
            raise ValidationError(
                f"Invalid customer status: {status}",
                errors={"status": [f"must be one of: {', '.join(CUSTOMER_STATUSES)}"]},
            )
        return await self.repository.update_status(customer_id, status)

    async def archive(self, customer_id: str) -> bool:
        return await self.repository.archive(customer_id)

    async def restore(self, customer_id: str) -> bool:
        return await self.repository.restore(customer_id)

    async def delete(self, customer_id: str) -> bool:
        return await self.repository.delete(customer_id)

    async def get_history(self, customer_id: str, options: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self.repository.get_history(customer_id, options)

    async def get_stats(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.repository.get_stats(filters)

    async def bulk_import(self, rows: Sequence[Mapping[str, Any]]) -> BulkResult:
        """Validate every row locally, then create them in one request."""
        customers = [CustomerData.from_dict({"status": "active", **_normalize(row)}) for row in rows]
        if not customers:
            return BulkResult()
        return await self.execute_with_metrics("bulk_import", self.repository.bulk_create, customers)
