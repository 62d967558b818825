"""Request-payload helpers shared by blueprints and services.

get_json_body:     request body as a dict ({} for missing / malformed JSON)
clean_text:        stripped string or None
coerce_score:      validated 0..100 integer score
require_item_list: guard for the ordered-replacement arrays
Patch:             base for per-entity optional-field update records
"""

from dataclasses import fields

from flask import request

from customer_model.core.exceptions import ValidationError
from customer_model.models import SCORE_MAX, SCORE_MIN

KEY_MAX_LENGTH = 100
NAME_MAX_LENGTH = 200


def get_json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def clean_text(value):
    """Return ``value`` stripped, or None when it is not a non-blank string."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _require_text_type(name: str, value) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", details={name: "must be a string"})


def require_fields(data: dict, *names: str) -> dict:
    """Return {name: cleaned value}; raise one ValidationError naming every missing field."""
    for name in names:
        _require_text_type(name, data.get(name))
    values = {name: clean_text(data.get(name)) for name in names}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise ValidationError(
            f"{' and '.join(names)} are required",
            details={name: "required" for name in missing},
        )
    for name, value in values.items():
        limit = KEY_MAX_LENGTH if name.endswith("_key") else NAME_MAX_LENGTH
        if len(value) > limit:
            raise ValidationError(f"{name} must be ≤ {limit} characters", details={name: "too long"})
    return values


def coerce_score(name: str, value) -> int:
    """Validate a score. Integral floats and digit strings are accepted; bools are not."""
    if isinstance(value, bool):
        value = None
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not SCORE_MIN <= value <= SCORE_MAX:
        raise ValidationError(
            f"{name} must be an integer between {SCORE_MIN} and {SCORE_MAX}",
            details={name: "out of range"},
        )
    return value


def require_item_list(value, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be an array", details={field_name: "array required"})
    return value


class Patch:
    """Base for dataclass update records.

    Subclasses declare every patchable field defaulting to None; ``from_payload``
    fills only the fields present in the request, so None always means
    "not supplied".
    """

    TEXT_FIELDS: tuple = ()
    SCORE_FIELDS: tuple = ()

    @classmethod
    def from_payload(cls, data: dict):
        patch = cls()
        for name in cls.TEXT_FIELDS:
            if name in data:
                _require_text_type(name, data[name])
                value = clean_text(data[name])
                if value is None:
                    raise ValidationError(f"{name} cannot be empty", details={name: "required"})
                if len(value) > NAME_MAX_LENGTH:
                    raise ValidationError(
                        f"{name} must be ≤ {NAME_MAX_LENGTH} characters", details={name: "too long"},
                    )
                setattr(patch, name, value)
        for name in cls.SCORE_FIELDS:
            if name in data:
                setattr(patch, name, coerce_score(name, data[name]))
        return patch

    def present(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.present()

    def apply_to(self, obj) -> list[str]:
        changed = self.present()
        for name, value in changed.items():
            setattr(obj, name, value)
        return sorted(changed)
