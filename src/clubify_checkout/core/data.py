"""Base data record and result containers."""

import dataclasses
from dataclasses import InitVar, dataclass, field
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from .exceptions import ValidationError
from .validation import Rule, RuleValidator

T = TypeVar("T", bound="BaseData")

SERVER_FIELDS = ("id", "created_at", "updated_at")


@dataclass
class BaseData:
    """Typed record validated against the class-level ``RULES`` map.

    Direct construction and :meth:`from_dict` validate; :meth:`from_api`
    trusts the remote payload. Unknown keys are kept in ``extra``.
    """

    RULES: ClassVar[Dict[str, Sequence[Rule]]] = {}

    id: Optional[Any] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    strict: InitVar[bool] = True

    def __post_init__(self, strict: bool = True):
        if strict:
            self.validate()

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in dataclasses.fields(cls) if f.name != "extra"]

    @classmethod
    def _split(cls, data: Mapping[str, Any]) -> tuple:
        names = set(cls.field_names())
        known = {k: v for k, v in data.items() if k in names}
        extra = {k: v for k, v in data.items() if k not in names and k != "extra"}
        return known, extra

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Build from a caller payload, validating the rule map."""
        known, extra = cls._split(data)
        return cls(**known, extra=extra)

    @classmethod
    def from_api(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Build from a remote payload without validation."""
        known, extra = cls._split(data or {})
        return cls(**known, extra=extra, strict=False)

    @classmethod
    def validate_patch(cls, patch: Mapping[str, Any]) -> None:
        """Validate only the fields present in a partial update."""
        rules = {
            name: [rule for rule in field_rules if rule != "required"]
            for name, field_rules in cls.RULES.items()
            if name in patch
        }
        errors = RuleValidator.validate(patch, rules)
        if errors:
            raise ValidationError(f"Invalid {cls.__name__} update", errors=errors)

    def validate(self) -> None:
        """Raise :class:`ValidationError` listing every failing field."""
        errors = RuleValidator.validate(self._values(), self.RULES)
        if errors:
            raise ValidationError(f"Invalid {type(self).__name__} data", errors=errors)

    def is_valid(self) -> bool:
        try:
            self.validate()
            return True
        except ValidationError:
            return False

    def to_dict(self) -> Dict[str, Any]:
        """All non-None fields merged over ``extra``."""
        result = dict(self.extra)
        result.update({k: v for k, v in self._values().items() if v is not None})
        return result

    def to_payload(self) -> Dict[str, Any]:
        """Request body: :meth:`to_dict` without server-assigned fields."""
        return {k: v for k, v in self.to_dict().items() if k not in SERVER_FIELDS}

    def with_changes(self: T, **changes: Any) -> T:
        return dataclasses.replace(self, strict=False, **changes)

    def _values(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


def extract_entity(data: Any) -> Optional[Dict[str, Any]]:
    """Unwrap a ``{"data": {...}}`` envelope when present."""
    if isinstance(data, dict):
        inner = data.get("data")
        if isinstance(inner, dict):
            return inner
        return data
    return None


def extract_items(data: Any) -> List[Dict[str, Any]]:
    """Pull the item list out of a list body or a paged envelope."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("data", "items", "results"):
            value = data.get(key)
            if isinstance(value, list):
                return value
            if isinstance(value, dict) and isinstance(value.get("items"), list):
                return value["items"]
    return []


@dataclass
class ResultPage(Generic[T]):
    """One page of entities."""
    items: List[T] = field(default_factory=list)
    total: int = 0
    limit: Optional[int] = None
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @classmethod
    def from_api(
        cls,
        data: Any,
        entity_class: Type[T],
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> "ResultPage[T]":
        rows = extract_items(data)
        total = len(rows)
        if isinstance(data, dict):
            meta = data.get("meta") if isinstance(data.get("meta"), dict) else {}
            total = data.get("total", meta.get("total", total))
        return cls(
            items=[entity_class.from_api(row) for row in rows if isinstance(row, dict)],
            total=int(total or 0),
            limit=limit,
            offset=offset,
        )


@dataclass
class BulkResult:
    """Outcome of a bulk create or update."""
    count: int = 0
    ids: List[Any] = field(default_factory=list)
    raw: Any = None

    @classmethod
    def from_api(cls, data: Any, fallback_ids: Sequence[Any] = ()) -> "BulkResult":
        rows = extract_items(data)
        ids = [row.get("id") for row in rows if isinstance(row, dict) and row.get("id") is not None]
        if not ids:
            ids = list(fallback_ids)
        count = len(ids)
        if isinstance(data, dict) and isinstance(data.get("count"), int):
            count = data["count"]
        return cls(count=count, ids=ids, raw=data)
