"""Domain event emitted after a successful remote mutation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Event named ``{Entity}.{Action}``, e.g. ``Offer.Created``."""

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    source: str = "clubify_checkout"
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Event name cannot be empty")

    @property
    def aggregate_type(self) -> str:
        return self.name.split(".", 1)[0]

    @property
    def action(self) -> Optional[str]:
        parts = self.name.split(".", 1)
        return parts[1] if len(parts) > 1 else None

    @property
    def aggregate_id(self) -> Optional[Any]:
        return self.payload.get("id")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "payload": self.payload,
            "source": self.source,
            "occurred_at": self.occurred_at.isoformat(),
        }
