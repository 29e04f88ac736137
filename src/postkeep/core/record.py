"""
Record base classes and metadata orchestration for PostKeep.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Type, TypeVar

from ..utils import camel_to_snake
from .fields import Field


class RecordConfigurationError(Exception):
    """Raised when a record class is misconfigured."""


@dataclass
class RecordOptions:
    """
    Container for record metadata calculated by :class:`RecordMeta`.
    """

    record: Type["Record"]
    name: str = ""
    verbose_name: str = ""
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)
    primary_key: Optional[Field] = None

    def add_field(self, field_obj: Field) -> None:
        if field_obj.name in self.fields:
            raise RecordConfigurationError(
                f"Duplicate field name '{field_obj.name}' on record '{self.record.__name__}'"
            )
        self.fields[field_obj.name] = field_obj
        if field_obj.primary_key:
            if self.primary_key and self.primary_key is not field_obj:
                raise RecordConfigurationError(
                    f"Multiple primary keys defined on record '{self.record.__name__}'"
                )
            self.primary_key = field_obj

    def get_field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise KeyError(f"Unknown field '{name}' on record '{self.record.__name__}'") from exc

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()

    def resolve(self, key: str) -> Optional[Field]:
        """
        Find a field by attribute name or by storage key.
        """
        if key in self.fields:
            return self.fields[key]
        for field_obj in self.fields.values():
            if field_obj.storage_key == key:
                return field_obj
        return None


TRecord = TypeVar("TRecord", bound="Record")


class RecordMeta(type):
    """
    Metaclass responsible for collecting fields and establishing metadata.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "RecordMeta":
        # Allow creation of the base Record class without processing fields.
        if name == "Record" and not bases:
            return super().__new__(mcls, name, bases, attrs)

        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)

        meta = getattr(cls, "Meta", None)
        record_name = camel_to_snake(name)
        verbose_name = record_name.replace("_", " ")
        if meta:
            record_name = getattr(meta, "name", record_name)
            verbose_name = getattr(meta, "verbose_name", verbose_name)

        cls._meta = RecordOptions(record=cls, name=record_name, verbose_name=verbose_name)

        sorted_fields = sorted(declared_fields.items(), key=lambda item: item[1].creation_counter)
        for attr_name, field_obj in sorted_fields:
            field_obj.contribute_to_class(cls, attr_name)
            cls._meta.add_field(field_obj)

        if not cls._meta.primary_key:
            raise RecordConfigurationError(
                f"Record '{cls.__name__}' must declare a primary key field."
            )

        return cls


class Record(metaclass=RecordMeta):
    """
    Base record providing a validated data container.
    Persistence is supplied by repositories and collections.
    """

    def __init__(self, **kwargs: Any) -> None:
        self._field_values: Dict[str, Any] = {}

        unknown = set(kwargs) - set(self._meta.fields)
        if unknown:
            raise TypeError(
                f"Unexpected field(s) for {self.__class__.__name__}: {', '.join(sorted(unknown))}"
            )

        for field in self._meta.get_fields():
            if field.name in kwargs:
                setattr(self, field.name, kwargs[field.name])
            elif field.has_default:
                setattr(self, field.name, field.get_default())

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{field.name}={repr(self._field_values.get(field.name))}"
            for field in self._meta.get_fields()
            if field.name in self._field_values
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record) or other.__class__ is not self.__class__:
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    @property
    def pk(self) -> Any:
        return getattr(self, self._meta.primary_key.name)

    def to_dict(self) -> Dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in self._meta.get_fields()}

    def to_storage(self) -> Dict[str, Any]:
        """
        Serialize to the camelCase, JSON-compatible mapping kept in storage.
        """
        return {
            field.key(): field.to_storage(getattr(self, field.name))
            for field in self._meta.get_fields()
        }

    @classmethod
    def from_storage(cls: Type[TRecord], data: Mapping[str, Any]) -> TRecord:
        """
        Rebuild a record from stored data, validating every field.

        Raises :class:`~postkeep.validation.ValidationError` when the stored
        shape does not match the schema.
        """
        from ..validation import clean_payload

        values = clean_payload(cls, data, include_primary_key=True)
        return cls(**values)

    def merged(self: TRecord, values: Mapping[str, Any]) -> TRecord:
        """
        Return a copy with ``values`` replacing the matching fields.
        """
        data = self.to_dict()
        data.update(values)
        return self.__class__(**data)

    # Validation --------------------------------------------------------
    def full_clean(self) -> None:
        from ..validation import validate_instance

        validate_instance(self)

    def clean(self) -> None:
        """
        Hook for subclasses to implement record-level validation.
        """
        return None

    @classmethod
    def register_hook(cls, event: str, handler) -> None:
        from ..hooks import hooks

        hooks.register(event, handler, record=cls)
