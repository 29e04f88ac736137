"""
Validation pipeline used by records, repositories and managers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Type

from .errors import ValidationError

if TYPE_CHECKING:
    from ..core.fields import Field
    from ..core.record import Record


_MISSING = object()


@dataclass
class ValidationResult:
    """
    Outcome of checking a payload: cleaned values or per-field messages.
    """

    values: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def clean_payload(
    record_cls: Type["Record"],
    payload: Mapping[str, Any],
    *,
    partial: bool = False,
    include_primary_key: bool = False,
    instance: Optional["Record"] = None,
) -> Dict[str, Any]:
    """
    Normalize ``payload`` against the fields of ``record_cls``.

    Keys may be attribute names or storage keys. With ``partial`` set, only
    the supplied fields are cleaned; otherwise missing fields fall back to
    their defaults. ``instance`` is the record being updated, used to guard
    immutable fields.
    """

    if not isinstance(payload, Mapping):
        raise ValidationError({"__all__": [f"Expected a mapping, received {type(payload).__name__}."]})

    errors: Dict[str, List[str]] = {}
    supplied: Dict[str, Any] = {}
    meta = record_cls._meta

    for key, value in payload.items():
        field_obj = meta.resolve(key)
        if field_obj is None:
            _add_error(errors, "__all__", f"Unknown field '{key}'.")
            continue
        name = field_obj.require_name()
        if not field_obj.editable and not include_primary_key:
            _add_error(errors, name, "This field cannot be edited.")
            continue
        supplied[name] = value

    cleaned: Dict[str, Any] = {}
    for field_obj in meta.get_fields():
        name = field_obj.require_name()
        if name in errors:
            continue
        raw = supplied.get(name, _MISSING)
        if raw is _MISSING:
            if partial:
                continue
            if field_obj.primary_key:
                if not include_primary_key:
                    continue
                raw = None
            else:
                raw = field_obj.get_default() if field_obj.has_default else None
        try:
            value = field_obj.clean(raw)
        except ValueError as exc:
            _add_error(errors, name, str(exc))
            continue
        if instance is not None and field_obj.immutable and value != getattr(instance, name):
            _add_error(errors, name, "This field cannot be changed.")
            continue
        cleaned[name] = value

    if errors:
        raise ValidationError(errors)
    return cleaned


def check_payload(
    record_cls: Type["Record"],
    payload: Mapping[str, Any],
    *,
    partial: bool = False,
    instance: Optional["Record"] = None,
) -> ValidationResult:
    """
    Like :func:`clean_payload` but reports failures as data instead of raising.
    """

    try:
        values = clean_payload(record_cls, payload, partial=partial, instance=instance)
    except ValidationError as exc:
        return ValidationResult(errors=exc.errors)
    return ValidationResult(values=values)


def validate_instance(instance: "Record") -> None:
    errors: Dict[str, List[str]] = {}

    for field_obj in instance._meta.get_fields():
        field_name = field_obj.require_name()
        value = getattr(instance, field_name, None)
        try:
            _validate_field(field_obj, value)
        except ValidationError as exc:
            _merge_errors(errors, exc.errors)

    # Record-level clean hook
    clean_method = getattr(instance, "clean", None)
    if callable(clean_method):
        try:
            clean_method()
        except ValidationError as exc:
            _merge_errors(errors, exc.errors)
        except ValueError as exc:
            _add_error(errors, "__all__", str(exc))

    if errors:
        raise ValidationError(errors)


def _validate_field(field_obj: "Field", value: Any) -> None:
    try:
        field_obj.clean(value)
    except ValueError as exc:
        field_name = field_obj.require_name()
        raise ValidationError({field_name: [str(exc)]}) from exc


def _add_error(errors: Dict[str, List[str]], field_name: str, message: str) -> None:
    errors.setdefault(field_name, []).append(message)


def _merge_errors(target: Dict[str, List[str]], source: Dict[str, List[str]]) -> None:
    for field_name, messages in source.items():
        target.setdefault(field_name, []).extend(messages)
