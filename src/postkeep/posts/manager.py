"""
Lifecycle manager for blog posts.
"""

from __future__ import annotations

from ..lifecycle import LifecycleManager
from .models import BlogPost


class PostManager(LifecycleManager[BlogPost]):
    kind = "post"
    label_field = "title"
