"""
Storage management for VaultKeep.

NOTICE:
The vault snapshot is written to a local file in clear text. Nothing is
encrypted and nothing is transmitted. Use only with demo data.
"""

import os
import json
import stat
import platform
import logging
import shutil
from typing import Any, Callable, Dict, List, Optional

from .audit import AuditReport, compute_audit
from .models import (
    VaultItem, LoginItem, CardItem, NoteItem, ValidationError,
    item_from_dict, make_item, now_iso,
)
from . import config

logger = logging.getLogger(__name__)

Listener = Callable[[List[VaultItem]], None]


def default_items() -> List[VaultItem]:
    """The demo dataset used when no readable snapshot exists."""
    now = now_iso()
    return [
        LoginItem(id='1', name='Netflix', username='alex.morgan@gmail.com', password='Password123!',
                  url='netflix.com', favorite=True, last_used=now, strength=85),
        LoginItem(id='2', name='Spotify', username='alex_m_music', password='123',
                  url='spotify.com', favorite=False, last_used=now, strength=10),
        CardItem(id='3', name='Chase Visa', card_number='**** **** **** 7890', expiry='12/26',
                 cvv='123', favorite=False, last_used=now),
        NoteItem(id='4', name='WiFi Home', note='secret_wifi_2024', favorite=True, last_used=now),
    ]


class LocalStorage:
    """
    Key/value store persisted as a single JSON file.

    Values are strings, as in a browser's local storage. Writes are best
    effort: failures are logged and the caller carries on.
    """

    def __init__(self, filepath: str):
        self.filepath = filepath

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.filepath):
            return {}
        with open(self.filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.filepath} does not hold an object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        try:
            value = self._read_all().get(key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read storage file {self.filepath}: {e}")
            return None
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> bool:
        try:
            data = self._read_all()
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable storage file {self.filepath}: {e}")
            data = {}
        data[key] = value

        tmp_path = self.filepath + '.tmp'
        try:
            directory = os.path.dirname(self.filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            # Atomic replace using shutil.move
            shutil.move(tmp_path, self.filepath)
            self._set_file_permissions(self.filepath)
            return True
        except OSError as e:
            logger.warning(f"Failed to write storage file {self.filepath}: {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            return False

    def _set_file_permissions(self, filepath: str) -> None:
        """Set file to be readable/writable by owner only."""
        if platform.system() != 'Windows':
            os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600


def serialize_items(items: List[VaultItem]) -> str:
    return json.dumps({
        'version': config.SNAPSHOT_VERSION,
        'items': [item.to_dict() for item in items],
    })


def deserialize_items(raw: str) -> List[VaultItem]:
    """
    Parse a vault snapshot.

    Accepts the versioned object format and the older bare array. Raises
    ValueError for anything else.
    """
    data = json.loads(raw)
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        version = data.get('version')
        if version != config.SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {version!r}")
        records = data.get('items')
        if not isinstance(records, list):
            raise ValueError("Snapshot has no item list")
    else:
        raise ValueError("Snapshot is neither an object nor a list")

    items = []
    seen_ids = set()
    for record in records:
        if not isinstance(record, dict):
            raise ValueError("Snapshot item is not an object")
        item = item_from_dict(record)
        if item.id in seen_ids:
            raise ValueError(f"Duplicate vault item id {item.id!r}")
        seen_ids.add(item.id)
        items.append(item)
    return items


class VaultStore:
    """
    Owns the vault items for the session.

    Every mutation notifies the subscribed listeners and returns the new
    snapshot. The store persists itself through a listener registered at
    construction time.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._items: List[VaultItem] = []
        self._listeners: List[Listener] = []
        self._audit: Optional[AuditReport] = None
        self._locale = config.DEFAULT_LOCALE
        self.subscribe(self._persist)

    def load(self) -> List[VaultItem]:
        """
        Load the snapshot from local storage.

        Falls back to the demo dataset when the snapshot is missing or
        cannot be parsed.
        """
        raw = self.storage.get_item(config.VAULT_STORAGE_KEY)
        items = None
        if raw is not None:
            try:
                items = deserialize_items(raw)
            except (ValueError, TypeError) as e:
                logger.warning(f"Vault snapshot is corrupt, using defaults: {e}")
        if items is None:
            items = default_items()
        self._items = items
        self._audit = None

        locale = self.storage.get_item(config.LOCALE_STORAGE_KEY)
        self._locale = locale if locale in config.SUPPORTED_LOCALES else config.DEFAULT_LOCALE
        logger.info(f"Loaded {len(self._items)} vault items")
        return self.items

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> List[VaultItem]:
        self._audit = None
        snapshot = self.items
        for listener in self._listeners:
            listener(snapshot)
        return snapshot

    def _persist(self, snapshot: List[VaultItem]) -> None:
        self.storage.set_item(config.VAULT_STORAGE_KEY, serialize_items(snapshot))

    def _index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    @property
    def items(self) -> List[VaultItem]:
        return self._items.copy()

    def get_item(self, item_id: str) -> Optional[VaultItem]:
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def add_item(self, item_type: str, fields: Dict[str, Any]) -> List[VaultItem]:
        """Create a new item and put it at the top of the vault."""
        item = make_item(item_type, fields)
        self._items.insert(0, item)
        logger.info(f"Added {item.type} item {item.id}")
        return self._changed()

    def update_item(self, item_id: str, fields: Dict[str, Any]) -> List[VaultItem]:
        """
        Apply edited fields to an item.

        ``fields`` may carry a new ``type``; the item is then rebuilt as that
        variant and fields of the old variant are cleared.
        """
        index = self._index_of(item_id)
        if index is None:
            logger.warning(f"Update ignored, no item with id {item_id}")
            return self.items

        current = self._items[index]
        merged = {'name': current.name, 'strength': current.strength}
        merged.update(current.secret_fields())
        merged.update(fields)
        item_type = merged.pop('type', current.type)

        self._items[index] = make_item(
            item_type, merged,
            item_id=current.id,
            favorite=current.favorite,
            last_used=now_iso(),
        )
        return self._changed()

    def toggle_favorite(self, item_id: str) -> List[VaultItem]:
        item = self.get_item(item_id)
        if item is None:
            logger.warning(f"Favorite toggle ignored, no item with id {item_id}")
            return self.items
        item.favorite = not item.favorite
        return self._changed()

    def delete_item(self, item_id: str) -> List[VaultItem]:
        index = self._index_of(item_id)
        if index is None:
            logger.warning(f"Delete ignored, no item with id {item_id}")
            return self.items
        del self._items[index]
        logger.info(f"Deleted item {item_id}")
        return self._changed()

    def filter_items(self, query: str = "", item_type: Optional[str] = None,
                     favorites_only: bool = False) -> List[VaultItem]:
        """Search by name or username, optionally limited by type and favorites."""
        items = self._items
        if favorites_only:
            items = [i for i in items if i.favorite]
        if item_type:
            items = [i for i in items if i.type == item_type]
        if query:
            q = query.lower()
            items = [
                i for i in items
                if q in i.name.lower() or q in (getattr(i, 'username', None) or '').lower()
            ]
        return list(items)

    @property
    def audit(self) -> AuditReport:
        """Audit of the current contents, recomputed only after a change."""
        if self._audit is None:
            self._audit = compute_audit(self._items)
        return self._audit

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        if locale not in config.SUPPORTED_LOCALES:
            raise ValidationError('unknown_locale', f"Unsupported locale: {locale!r}")
        self._locale = locale
        self.storage.set_item(config.LOCALE_STORAGE_KEY, locale)
