"""Tests for typed records and result containers."""

from dataclasses import dataclass
from typing import List, Optional

import pytest

from clubify_checkout.core.data import BaseData, BulkResult, ResultPage, extract_entity, extract_items
from clubify_checkout.core.exceptions import ValidationError


@dataclass
class GadgetData(BaseData):
    RULES = {
        "name": ["required", "string", ["min", 2]],
        "price": ["numeric", ["min", 0]],
        "tags": ["list"],
    }

    name: Optional[str] = None
    price: Optional[float] = None
    tags: Optional[List[str]] = None


class TestBaseData:

    def test_construction_validates(self):
        with pytest.raises(ValidationError) as exc_info:
            GadgetData(price=-1)

        assert set(exc_info.value.errors) == {"name", "price"}
        assert exc_info.value.details["errors"] == exc_info.value.errors

    def test_from_dict_keeps_unknown_keys(self):
        gadget = GadgetData.from_dict({"name": "Lamp", "color": "red"})

        assert gadget.extra == {"color": "red"}
        assert gadget.to_dict() == {"name": "Lamp", "color": "red"}

    def test_from_api_does_not_validate(self):
        gadget = GadgetData.from_api({"id": "g1", "price": -5})

        assert gadget.id == "g1"
        assert gadget.price == -5
        assert not gadget.is_valid()

    def test_to_payload_drops_server_fields(self):
        gadget = GadgetData.from_api({"id": "g1", "created_at": "2024-01-01", "name": "Lamp", "price": 10})

        assert gadget.to_payload() == {"name": "Lamp", "price": 10}

    def test_validate_patch_ignores_required(self):
        GadgetData.validate_patch({"price": 3})

        with pytest.raises(ValidationError) as exc_info:
            GadgetData.validate_patch({"name": "x"})
        assert list(exc_info.value.errors) == ["name"]

    def test_with_changes_returns_copy(self):
        gadget = GadgetData(name="Lamp")

        changed = gadget.with_changes(price=5)

        assert changed.price == 5
        assert gadget.price is None

    def test_field_names(self):
        assert GadgetData.field_names() == ["id", "created_at", "updated_at", "name", "price", "tags"]


class TestEnvelopes:

    def test_extract_entity(self):
        assert extract_entity({"data": {"id": 1}}) == {"id": 1}
        assert extract_entity({"id": 1}) == {"id": 1}
        assert extract_entity([1]) is None

    @pytest.mark.parametrize("body", [
        [{"id": 1}],
        {"data": [{"id": 1}]},
        {"items": [{"id": 1}]},
        {"results": [{"id": 1}]},
        {"data": {"items": [{"id": 1}]}},
    ])
    def test_extract_items(self, body):
        assert extract_items(body) == [{"id": 1}]

    def test_result_page_reads_total(self):
        page = ResultPage.from_api({"data": [{"id": "g1", "name": "Lamp"}], "total": 4}, GadgetData, limit=1, offset=2)

        assert page.total == 4
        assert page.has_more
        assert isinstance(page.items[0], GadgetData)

    def test_result_page_defaults_total_to_item_count(self):
        page = ResultPage.from_api([{"id": "g1"}, {"id": "g2"}], GadgetData)

        assert page.total == 2
        assert not page.has_more
        assert len(page) == 2

    def test_bulk_result(self):
        assert BulkResult.from_api({"data": [{"id": "a"}], "count": 3}).count == 3
        assert BulkResult.from_api(None, fallback_ids=["x", "y"]).ids == ["x", "y"]
