"""
Core building blocks for PostKeep records and metadata handling.
"""

from .fields import BooleanField, DateTimeField, Field, FieldError, StringField, UUIDField
from .record import Record, RecordConfigurationError, RecordMeta, RecordOptions

__all__ = [
    "BooleanField",
    "DateTimeField",
    "Field",
    "FieldError",
    "Record",
    "RecordConfigurationError",
    "RecordMeta",
    "RecordOptions",
    "StringField",
    "UUIDField",
]
