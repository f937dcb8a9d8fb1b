"""
Vault item records for VaultKeep.

NOTICE:
Items hold secrets in clear text. This is a demo vault and performs no
encryption; never store real credentials in it.
"""

import datetime
import uuid
from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Dict, Optional, Type


class ValidationError(ValueError):
    """Raised when user input cannot be saved.

    ``key`` names the notice shown to the user (see ``i18n``).
    """

    def __init__(self, key: str, detail: str = ""):
        super().__init__(detail or key)
        self.key = key
        self.detail = detail


# Attribute name -> persisted field name, where they differ
_PERSISTED_NAMES = {
    'card_number': 'cardNumber',
    'last_used': 'lastUsed',
}
_ATTRIBUTE_NAMES = {v: k for k, v in _PERSISTED_NAMES.items()}


def now_iso() -> str:
    return datetime.datetime.now().isoformat()


@dataclass
class VaultItem:
    """Fields shared by every kind of vault item."""
    id: str
    name: str
    favorite: bool = False
    last_used: str = ""
    strength: Optional[int] = None

    item_type = ""

    @classmethod
    def field_names(cls):
        return [f.name for f in dataclass_fields(cls)]

    @classmethod
    def variant_field_names(cls):
        """Names of the fields that only exist on this variant."""
        common = {f.name for f in dataclass_fields(VaultItem)}
        return [name for name in cls.field_names() if name not in common]

    @property
    def type(self) -> str:
        return self.item_type

    def secret_fields(self) -> Dict[str, Any]:
        """Variant-specific fields as a plain dict, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.variant_field_names()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: Dict[str, Any] = {'type': self.item_type}
        for name in self.field_names():
            value = getattr(self, name)
            if value is None:
                continue
            data[_PERSISTED_NAMES.get(name, name)] = value
        return data


@dataclass
class LoginItem(VaultItem):
    username: Optional[str] = None
    password: Optional[str] = None
    url: Optional[str] = None

    item_type = 'login'


@dataclass
class CardItem(VaultItem):
    card_number: Optional[str] = None
    expiry: Optional[str] = None
    cvv: Optional[str] = None

    item_type = 'card'


@dataclass
class NoteItem(VaultItem):
    note: Optional[str] = None

    item_type = 'note'


ITEM_CLASSES: Dict[str, Type[VaultItem]] = {
    cls.item_type: cls for cls in (LoginItem, CardItem, NoteItem)
}
ITEM_TYPES = tuple(ITEM_CLASSES)

# Every field any variant accepts, including the common ones
_KNOWN_FIELDS = {name for cls in ITEM_CLASSES.values() for name in cls.field_names()}


def coerce_strength(value: Any) -> Optional[int]:
    """Clamp a strength score to 0-100; anything non-numeric becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = int(value)
    except (TypeError, ValueError):
        return None
    return max(0, min(100, score))


def item_from_dict(data: Dict[str, Any]) -> VaultItem:
    """
    Create the matching variant from a persisted dictionary.

    Keys that do not belong to the variant are dropped. Raises ValueError
    for an unknown type, a record without an id or name, or text fields
    holding something other than a string.
    """
    item_type = data.get('type')
    cls = ITEM_CLASSES.get(item_type)
    if cls is None:
        raise ValueError(f"Unknown vault item type: {item_type!r}")
    if not data.get('id') or data.get('name') is None:
        raise ValueError("Vault item is missing its id or name")

    allowed = set(cls.field_names())
    kwargs = {}
    for key, value in data.items():
        name = _ATTRIBUTE_NAMES.get(key, key)
        if name in allowed:
            kwargs[name] = value
    for name in ["name", "last_used"] + cls.variant_field_names():
        value = kwargs.get(name)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Vault item field {name!r} must be text, got {type(value).__name__}")
    kwargs['id'] = str(kwargs['id'])
    kwargs['favorite'] = bool(kwargs.get('favorite', False))
    kwargs['strength'] = coerce_strength(kwargs.get('strength'))
    return cls(**kwargs)


def make_item(item_type: str, fields: Dict[str, Any], item_id: Optional[str] = None,
              favorite: bool = False, last_used: Optional[str] = None) -> VaultItem:
    """
    Build a vault item of ``item_type`` from form fields.

    Fields that belong to a different variant are cleared, so switching the
    type of an item never leaves stale card or note data behind.
    """
    cls = ITEM_CLASSES.get(item_type)
    if cls is None:
        raise ValidationError('unknown_type', f"Unknown vault item type: {item_type!r}")

    unknown = set(fields) - _KNOWN_FIELDS - {'type'}
    if unknown:
        raise ValidationError('unknown_field', f"Unknown fields: {', '.join(sorted(unknown))}")

    name = (fields.get('name') or '').strip()
    if not name:
        raise ValidationError('name_required', "Item name is required")

    kwargs = {k: v for k, v in fields.items() if k in cls.variant_field_names()}
    return cls(
        id=item_id or str(uuid.uuid4()),
        name=name,
        favorite=favorite,
        last_used=last_used or now_iso(),
        strength=coerce_strength(fields.get('strength')),
        **kwargs
    )
