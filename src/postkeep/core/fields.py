"""
Field definitions and descriptors for PostKeep records.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Sequence, cast

from ..utils.naming import snake_to_camel

if TYPE_CHECKING:
    from .record import Record


class FieldError(Exception):
    """Internal exception for field configuration issues."""


class Field:
    """
    Base class for record field descriptors.

    Fields manage attribute storage on record instances and retain the metadata
    required for validation and for mapping attributes to storage keys.
    """

    _creation_counter = 0

    def __init__(
        self,
        *,
        primary_key: bool = False,
        nullable: bool = True,
        default: Any = None,
        storage_key: Optional[str] = None,
        editable: bool = True,
        immutable: bool = False,
        choices: Optional[Sequence[Any]] = None,
        validators: Optional[Iterable[Callable[[Any], None]]] = None,
        help_text: Optional[str] = None,
    ) -> None:
        self.primary_key = primary_key
        self.nullable = nullable
        self.default = default
        self.storage_key = storage_key
        self.editable = editable
        self.immutable = immutable
        self.choices = tuple(choices) if choices is not None else None
        self.validators = list(validators or [])
        self.help_text = help_text

        self.record: type["Record"] | None = None  # Will be set during contribute_to_class
        self.name: str | None = None
        self.creation_counter = Field._creation_counter
        Field._creation_counter += 1

    # Descriptor protocol -------------------------------------------------
    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self

        record_instance = cast("Record", instance)
        name = self.require_name()
        value = record_instance._field_values.get(name)
        if value is None and name not in record_instance._field_values:
            default = self.get_default()
            if default is not None:
                record_instance._field_values[name] = default
                return default
        return value

    def __set__(self, instance: object, value: Any) -> None:
        record_instance = cast("Record", instance)
        name = self.require_name()
        if value is None:
            if not self.nullable and not self.primary_key:
                raise ValueError(f"Field '{name}' cannot be None")
            record_instance._field_values[name] = None
            return

        python_value = self.to_python(value)
        if self.choices and python_value not in self.choices:
            raise ValueError(f"Value '{value}' for field '{name}' not in choices {self.choices}")
        record_instance._field_values[name] = python_value

    # Metadata helpers ----------------------------------------------------
    def bind(self, record: type["Record"], name: str) -> None:
        self.record = record
        self.name = name
        if self.storage_key is None:
            self.storage_key = snake_to_camel(name)

    def contribute_to_class(self, record: type["Record"], name: str) -> None:
        """
        Attach the field to the record class as a descriptor.
        """
        self.bind(record, name)
        setattr(record, name, self)

    def require_name(self) -> str:
        if self.name is None:
            raise FieldError("Field name is not set.")
        return self.name

    def key(self) -> str:
        if self.storage_key:
            return self.storage_key
        return self.require_name()

    # Conversion / validation ---------------------------------------------
    def get_default(self) -> Any:
        if callable(self.default):
            return self.default()
        return self.default

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_python(self, value: Any) -> Any:
        return value

    def to_storage(self, value: Any) -> Any:
        """
        Convert a Python value into its JSON-compatible representation.
        """
        return value

    def run_validators(self, value: Any) -> None:
        for validator in self.validators:
            validator(value)

    def clean(self, value: Any) -> Any:
        """
        Convert, check and validate a raw value, raising ``ValueError`` on failure.
        """
        if value is None:
            if not self.nullable:
                raise ValueError("This field is required.")
            return None
        python_value = self.to_python(value)
        if self.choices and python_value not in self.choices:
            options = ", ".join(str(choice) for choice in self.choices)
            raise ValueError(f"Invalid value '{value}'. Expected one of: {options}.")
        self.run_validators(python_value)
        return python_value


class UUIDField(Field):
    """
    Opaque string identifier generated when a record is created.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("primary_key", True)
        kwargs.setdefault("nullable", False)
        kwargs.setdefault("editable", False)
        super().__init__(default=self.generate, **kwargs)

    @staticmethod
    def generate() -> str:
        return str(uuid.uuid4())

    def to_python(self, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid identifier {value!r}")
        return value


class StringField(Field):
    def __init__(self, *, max_length: int | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length

    def to_python(self, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"Expected a string, received {type(value).__name__}.")
        if self.max_length and len(value) > self.max_length:
            raise ValueError(f"Ensure this value has at most {self.max_length} characters.")
        return value


class BooleanField(Field):
    def __init__(self, *, default: Any = False, **kwargs: Any) -> None:
        kwargs.setdefault("nullable", False)
        super().__init__(default=default, **kwargs)

    @property
    def has_default(self) -> bool:
        return True

    def get_default(self) -> Any:
        return bool(super().get_default())

    def to_python(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in {"true", "t", "1"}:
                return True
            if lowered in {"false", "f", "0"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Invalid boolean value '{value}'")


class DateTimeField(Field):
    """
    Timezone-aware datetime stored as an ISO-8601 string.

    Naive datetimes are taken to be UTC. Plain dates become midnight UTC.
    """

    def __init__(self, *, auto_now_add: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.auto_now_add = auto_now_add

    @property
    def has_default(self) -> bool:
        return self.auto_now_add or super().has_default

    def get_default(self) -> Any:
        if self.auto_now_add:
            return datetime.now(timezone.utc)
        return super().get_default()

    def to_python(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return _ensure_aware(value)
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                return _ensure_aware(datetime.fromisoformat(text))
            except ValueError as exc:
                raise ValueError(f"Invalid date value '{value}'") from exc
        raise ValueError(f"Expected a date, received {type(value).__name__}.")

    def to_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return value.isoformat()


def _ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
