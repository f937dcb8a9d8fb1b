"""
Tests for LocalStorage and VaultStore: loading with fallbacks, mutations,
persistence and the memoized audit.
"""

import json

import pytest

from vaultkeep import config
from vaultkeep.models import CardItem, LoginItem, NoteItem, ValidationError
from vaultkeep.storage import (
    LocalStorage, VaultStore, default_items, deserialize_items, serialize_items,
)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "storage.json"))


@pytest.fixture
def store(storage):
    s = VaultStore(storage)
    s.load()
    return s


def _saved_items(storage):
    return deserialize_items(storage.get_item(config.VAULT_STORAGE_KEY))


class TestLocalStorage:

    def test_missing_file_returns_none(self, storage):
        assert storage.get_item("anything") is None

    def test_set_then_get(self, storage):
        assert storage.set_item("lang", "en") is True
        assert storage.get_item("lang") == "en"

    def test_keys_are_independent(self, storage):
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        assert storage.get_item("a") == "1"
        assert storage.get_item("b") == "2"

    def test_corrupt_file_reads_as_empty(self, storage):
        with open(storage.filepath, "w") as f:
            f.write("{not json")
        assert storage.get_item("lang") is None

    def test_corrupt_file_overwritten_on_write(self, storage):
        with open(storage.filepath, "w") as f:
            f.write("[1, 2")
        assert storage.set_item("lang", "zh") is True
        assert storage.get_item("lang") == "zh"

    def test_write_failure_is_absorbed(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        # Parent "directory" is a regular file, so the write must fail
        broken = LocalStorage(str(blocker / "storage.json"))
        assert broken.set_item("lang", "en") is False


class TestSnapshotFormat:

    def test_versioned_snapshot(self):
        raw = serialize_items(default_items())
        data = json.loads(raw)
        assert data["version"] == config.SNAPSHOT_VERSION
        assert len(data["items"]) == 4

    def test_bare_array_accepted(self):
        raw = json.dumps([{"type": "note", "id": "1", "name": "n", "favorite": False, "lastUsed": ""}])
        items = deserialize_items(raw)
        assert isinstance(items[0], NoteItem)

    def test_unknown_version_rejected(self):
        with pytest.raises(ValueError):
            deserialize_items(json.dumps({"version": 99, "items": []}))


class TestLoad:

    def test_missing_snapshot_uses_defaults(self, store):
        names = [i.name for i in store.items]
        assert names == ["Netflix", "Spotify", "Chase Visa", "WiFi Home"]

    def test_corrupt_snapshot_uses_defaults(self, storage):
        storage.set_item(config.VAULT_STORAGE_KEY, "{garbage")
        store = VaultStore(storage)
        assert len(store.load()) == 4

    def test_bad_item_uses_defaults(self, storage):
        storage.set_item(config.VAULT_STORAGE_KEY, json.dumps([{"type": "boat", "id": "1", "name": "x"}]))
        store = VaultStore(storage)
        assert [i.id for i in store.load()] == ["1", "2", "3", "4"]

    def test_duplicate_ids_use_defaults(self, storage):
        records = [
            {"type": "note", "id": "7", "name": "First"},
            {"type": "note", "id": "7", "name": "Second"},
        ]
        storage.set_item(config.VAULT_STORAGE_KEY, json.dumps(records))
        store = VaultStore(storage)
        assert [i.id for i in store.load()] == ["1", "2", "3", "4"]

    def test_numeric_and_string_ids_collide(self, storage):
        records = [
            {"type": "note", "id": 7, "name": "First"},
            {"type": "note", "id": "7", "name": "Second"},
        ]
        with pytest.raises(ValueError, match="Duplicate"):
            deserialize_items(json.dumps(records))

    def test_non_text_name_uses_defaults(self, storage):
        storage.set_item(config.VAULT_STORAGE_KEY, json.dumps([{"type": "note", "id": "1", "name": 5}]))
        store = VaultStore(storage)
        assert [i.id for i in store.load()] == ["1", "2", "3", "4"]
        assert [i.name for i in store.filter_items("net")] == ["Netflix"]

    def test_bad_strength_is_dropped_and_item_editable(self, storage):
        records = [{"type": "login", "id": "9", "name": "Mail", "password": "pw", "strength": "abc"}]
        storage.set_item(config.VAULT_STORAGE_KEY, json.dumps(records))
        store = VaultStore(storage)
        assert store.load()[0].strength is None
        store.update_item("9", {"name": "Mail 2"})
        assert store.get_item("9").name == "Mail 2"

    def test_saved_snapshot_is_reloaded(self, storage, store):
        store.add_item("note", {"name": "Alarm code", "note": "1234"})
        reloaded = VaultStore(storage)
        items = reloaded.load()
        assert items[0].name == "Alarm code"
        assert len(items) == 5

    def test_locale_defaults_and_persists(self, storage, store):
        assert store.locale == config.DEFAULT_LOCALE
        store.set_locale("zh")
        reloaded = VaultStore(storage)
        reloaded.load()
        assert reloaded.locale == "zh"

    def test_unknown_locale_rejected(self, store):
        with pytest.raises(ValidationError):
            store.set_locale("fr")
        assert store.locale == config.DEFAULT_LOCALE


class TestMutations:

    def test_add_prepends_and_persists(self, storage, store):
        snapshot = store.add_item("login", {"name": "GitHub", "username": "dev", "password": "pw"})
        assert snapshot[0].name == "GitHub"
        assert len(snapshot) == 5
        assert _saved_items(storage)[0].name == "GitHub"

    def test_add_empty_name_rejected_without_change(self, storage, store):
        before = store.items
        with pytest.raises(ValidationError):
            store.add_item("login", {"name": "", "password": "pw"})
        assert store.items == before
        assert storage.get_item(config.VAULT_STORAGE_KEY) is None

    def test_snapshot_is_a_copy(self, store):
        snapshot = store.items
        snapshot.clear()
        assert len(store.items) == 4

    def test_update_refreshes_last_used_and_keeps_id(self, store):
        original = store.get_item("2")
        original_last_used = original.last_used
        store.update_item("2", {"password": "A-much-longer-password"})
        updated = store.get_item("2")
        assert updated.id == "2"
        assert updated.password == "A-much-longer-password"
        assert updated.username == "alex_m_music"
        assert updated.last_used >= original_last_used

    def test_update_type_switch_clears_old_fields(self, storage, store):
        store.update_item("1", {"type": "note", "note": "now a note"})
        item = store.get_item("1")
        assert isinstance(item, NoteItem)
        assert item.favorite is True
        assert "password" not in _saved_items(storage)[0].to_dict()

    def test_update_empty_name_rejected(self, store):
        with pytest.raises(ValidationError):
            store.update_item("1", {"name": "  "})
        assert store.get_item("1").name == "Netflix"

    def test_update_unknown_id_is_noop(self, store):
        assert len(store.update_item("missing", {"name": "x"})) == 4

    def test_toggle_favorite(self, store):
        store.toggle_favorite("2")
        assert store.get_item("2").favorite is True
        store.toggle_favorite("2")
        assert store.get_item("2").favorite is False

    def test_delete(self, storage, store):
        snapshot = store.delete_item("3")
        assert [i.id for i in snapshot] == ["1", "2", "4"]
        assert [i.id for i in _saved_items(storage)] == ["1", "2", "4"]

    def test_delete_unknown_id_is_noop(self, store):
        assert len(store.delete_item("missing")) == 4

    def test_listeners_receive_snapshot(self, store):
        seen = []
        store.subscribe(seen.append)
        store.toggle_favorite("1")
        assert len(seen) == 1
        assert [i.id for i in seen[0]] == ["1", "2", "3", "4"]


class TestFilter:

    def test_search_name_and_username(self, store):
        assert [i.name for i in store.filter_items("netf")] == ["Netflix"]
        assert [i.name for i in store.filter_items("ALEX_M")] == ["Spotify"]

    def test_type_filter(self, store):
        assert [i.id for i in store.filter_items(item_type="card")] == ["3"]

    def test_favorites_only(self, store):
        assert [i.id for i in store.filter_items(favorites_only=True)] == ["1", "4"]


class TestAudit:

    def test_default_dataset_audit(self, store):
        report = store.audit
        # Spotify's "123" is weak; Netflix is 12 characters
        assert [i.name for i in report.weak] == ["Spotify"]
        assert report.reused == []
        assert report.score == 90

    def test_audit_memoized_until_change(self, store):
        first = store.audit
        assert store.audit is first
        store.add_item("login", {"name": "Copy", "password": "Password123!"})
        second = store.audit
        assert second is not first
        assert len(second.reused) == 2
        assert second.score == 100 - 30 - 10

    def test_card_only_vault_scores_100(self, store):
        for item_id in ("1", "2", "4"):
            store.delete_item(item_id)
        assert all(isinstance(i, CardItem) for i in store.items)
        assert store.audit.score == 100
