"""
Validation utilities exposed at the package level.
"""

from .errors import DuplicateIdentifierError, ValidationError
from .pipeline import ValidationResult, check_payload, clean_payload, validate_instance
from .validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
)

__all__ = [
    "DuplicateIdentifierError",
    "ValidationError",
    "ValidationResult",
    "check_payload",
    "clean_payload",
    "validate_instance",
    "MinLengthValidator",
    "MaxLengthValidator",
    "MinValueValidator",
    "MaxValueValidator",
    "RegexValidator",
]
