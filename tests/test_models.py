"""
Tests for vault item variants, persistence dicts and form construction.
"""

import pytest

from vaultkeep.models import (
    ITEM_TYPES, CardItem, LoginItem, NoteItem, ValidationError,
    item_from_dict, make_item,
)


class TestToDict:

    def test_login_uses_persisted_names(self):
        item = LoginItem(id="1", name="Netflix", username="alex", password="pw",
                         url="netflix.com", favorite=True, last_used="2024-01-01T00:00:00", strength=85)
        assert item.to_dict() == {
            "type": "login",
            "id": "1",
            "name": "Netflix",
            "favorite": True,
            "lastUsed": "2024-01-01T00:00:00",
            "strength": 85,
            "username": "alex",
            "password": "pw",
            "url": "netflix.com",
        }

    def test_card_number_camel_case_and_absent_fields_omitted(self):
        data = CardItem(id="3", name="Visa", card_number="4111").to_dict()
        assert data["cardNumber"] == "4111"
        assert "expiry" not in data
        assert "strength" not in data
        assert data["type"] == "card"


class TestFromDict:

    def test_builds_matching_variant(self):
        item = item_from_dict({"type": "card", "id": "3", "name": "Visa",
                               "cardNumber": "4111", "expiry": "12/26", "lastUsed": "x"})
        assert isinstance(item, CardItem)
        assert item.card_number == "4111"
        assert item.last_used == "x"
        assert item.favorite is False

    def test_drops_fields_of_other_variants(self):
        item = item_from_dict({"type": "note", "id": "4", "name": "Wifi",
                               "note": "secret", "password": "stale", "cvv": "999"})
        assert isinstance(item, NoteItem)
        assert "password" not in item.to_dict()
        assert "cvv" not in item.to_dict()

    def test_numeric_id_coerced_to_string(self):
        assert item_from_dict({"type": "note", "id": 7, "name": "n"}).id == "7"

    @pytest.mark.parametrize("data", [
        {"type": "identity", "id": "1", "name": "x"},
        {"id": "1", "name": "x"},
        {"type": "login", "name": "x"},
        {"type": "login", "id": "1"},
    ])
    def test_invalid_records_rejected(self, data):
        with pytest.raises(ValueError):
            item_from_dict(data)

    @pytest.mark.parametrize("data", [
        {"type": "note", "id": "1", "name": 5},
        {"type": "note", "id": "1", "name": ["Wifi"]},
        {"type": "login", "id": "1", "name": "x", "password": 123},
        {"type": "card", "id": "1", "name": "x", "cardNumber": {"n": 1}},
        {"type": "note", "id": "1", "name": "x", "lastUsed": 0},
    ])
    def test_non_text_fields_rejected(self, data):
        with pytest.raises(ValueError):
            item_from_dict(data)

    @pytest.mark.parametrize("raw,expected", [
        (85, 85),
        ("40", 40),
        (150, 100),
        (-3, 0),
        ("abc", None),
        ([1], None),
        (True, None),
    ])
    def test_strength_coerced(self, raw, expected):
        item = item_from_dict({"type": "login", "id": "1", "name": "x", "strength": raw})
        assert item.strength == expected


class TestMakeItem:

    def test_new_login_gets_id_and_timestamp(self):
        item = make_item("login", {"name": " GitHub ", "username": "dev", "password": "p"})
        assert isinstance(item, LoginItem)
        assert item.name == "GitHub"
        assert item.id
        assert item.last_used
        assert item.favorite is False

    def test_ids_are_unique(self):
        ids = {make_item("note", {"name": "n"}).id for _ in range(100)}
        assert len(ids) == 100

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValidationError) as exc:
            make_item("login", {"name": name})
        assert exc.value.key == "name_required"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError) as exc:
            make_item("identity", {"name": "x"})
        assert exc.value.key == "unknown_type"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc:
            make_item("login", {"name": "x", "pin": "1234"})
        assert exc.value.key == "unknown_field"

    def test_other_variant_fields_cleared(self):
        item = make_item("card", {"name": "Visa", "card_number": "4111", "password": "old"})
        assert isinstance(item, CardItem)
        assert not hasattr(item, "password")

    def test_unparseable_strength_dropped(self):
        item = make_item("login", {"name": "x", "strength": "strong"})
        assert item.strength is None

    def test_item_types_closed_set(self):
        assert ITEM_TYPES == ("login", "card", "note")
