"""Declarative rule-map validation for entity payloads.

A rule map associates a field name with a list of rule tokens::

    RULES = {
        "name": ["required", "string", ["min", 2], ["max", 255]],
        "status": [["in", ["draft", "active"]]],
    }

``None`` passes every rule except ``required``.
"""

import re
import uuid
from datetime import date, datetime
from numbers import Number
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

Rule = Union[str, Sequence[Any]]
RuleMap = Mapping[str, Sequence[Rule]]


class RuleValidator:
    """Evaluate rule maps and collect messages per field."""

    EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

    @classmethod
    def validate(cls, data: Mapping[str, Any], rules: RuleMap) -> Dict[str, List[str]]:
        """Return ``{field: [messages]}`` for every failing field."""
        errors: Dict[str, List[str]] = {}
        for field_name, field_rules in rules.items():
            value = data.get(field_name)
            for rule in field_rules:
                message = cls.check(field_name, value, rule)
                if message:
                    errors.setdefault(field_name, []).append(message)
        return errors

    @classmethod
    def check(cls, field_name: str, value: Any, rule: Rule) -> Optional[str]:
        """Evaluate a single rule; return an error message or None."""
        if isinstance(rule, str):
            name, argument = rule, None
        else:
            name, argument = rule[0], rule[1] if len(rule) > 1 else None

        if name == "required":
            if value is None or (isinstance(value, (str, list, dict)) and not value):
                return f"The {field_name} field is required"
            return None

        if value is None:
            return None

        checker = _CHECKS.get(name)
        if checker is None:
            raise ValueError(f"Unknown validation rule: {name}")
        return checker(field_name, value, argument)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_numeric(value: Any) -> bool:
    if _is_number(value):
        return True
    if isinstance(value, str):
        try:
            float(value)
            return True
        except ValueError:
            return False
    return False


def _measure(value: Any) -> Optional[float]:
    if _is_number(value):
        return float(value)
    if isinstance(value, (str, list, tuple, dict)):
        return float(len(value))
    return None


def _parse_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return True
    except ValueError:
        return False


def _check_min(field_name: str, value: Any, limit: Any) -> Optional[str]:
    size = _measure(value)
    if size is not None and size < limit:
        return f"The {field_name} field must be at least {limit}"
    return None


def _check_max(field_name: str, value: Any, limit: Any) -> Optional[str]:
    size = _measure(value)
    if size is not None and size > limit:
        return f"The {field_name} field may not be greater than {limit}"
    return None


def _check_in(field_name: str, value: Any, allowed: Any) -> Optional[str]:
    if value not in (allowed or []):
        return f"The {field_name} field must be one of: {', '.join(str(a) for a in allowed or [])}"
    return None


def _check_uuid(field_name: str, value: Any, _: Any) -> Optional[str]:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return f"The {field_name} field must be a valid UUID"
    return None


_CHECKS: Dict[str, Callable[[str, Any, Any], Optional[str]]] = {
    "string": lambda f, v, _: None if isinstance(v, str) else f"The {f} field must be a string",
    "numeric": lambda f, v, _: None if _is_numeric(v) else f"The {f} field must be numeric",
    "integer": lambda f, v, _: None if isinstance(v, int) and not isinstance(v, bool) else f"The {f} field must be an integer",
    "boolean": lambda f, v, _: None if isinstance(v, bool) else f"The {f} field must be true or false",
    "array": lambda f, v, _: None if isinstance(v, (list, tuple, dict)) else f"The {f} field must be an array",
    "list": lambda f, v, _: None if isinstance(v, (list, tuple)) else f"The {f} field must be a list",
    "dict": lambda f, v, _: None if isinstance(v, dict) else f"The {f} field must be an object",
    "date": lambda f, v, _: None if _parse_date(v) else f"The {f} field must be a valid date",
    "email": lambda f, v, _: None if isinstance(v, str) and RuleValidator.EMAIL_PATTERN.match(v) else f"The {f} field must be a valid email address",
    "uuid": _check_uuid,
    "min": _check_min,
    "max": _check_max,
    "in": _check_in,
}
