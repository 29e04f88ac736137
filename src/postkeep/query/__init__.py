"""
Query construction APIs for PostKeep.
"""

from .expressions import Q
from .queryset import RecordQuery

__all__ = ["Q", "RecordQuery"]
