"""
Derived list view: search, category and priority filters, newest first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..query import RecordQuery
from .models import BlogPost

ALL = "All"


@dataclass(frozen=True)
class PostFilter:
    search_term: str = ""
    category: str = ALL
    priority: str = ALL

    def apply(self, posts: Iterable[BlogPost]) -> List[BlogPost]:
        return filter_posts(
            posts,
            search_term=self.search_term,
            category=self.category,
            priority=self.priority,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.search_term) or self.category != ALL or self.priority != ALL


def filter_posts(
    posts: Iterable[BlogPost],
    search_term: str = "",
    category: str = ALL,
    priority: str = ALL,
) -> List[BlogPost]:
    """
    Return the posts matching every criterion, most recent publish date first.

    The search term is matched case-insensitively against titles only.
    ``"All"`` disables the category or priority filter. Posts sharing a
    publish date keep their input order.
    """

    query: RecordQuery[BlogPost] = RecordQuery(list(posts))
    if search_term:
        query = query.filter(title__icontains=search_term)
    if category != ALL:
        query = query.filter(category=category)
    if priority != ALL:
        query = query.filter(priority=priority)
    return query.order_by("-publish_date").all()
