"""
Blog post management: record, lifecycle, search, forms and views.
"""

from .forms import MIN_PUBLISH_DATE, PostForm, date_picker_allows
from .images import encode_image_file
from .manager import PostManager
from .models import CATEGORIES, PRIORITIES, BlogPost
from .search import ALL, PostFilter, filter_posts
from .views import PostRouter, Redirect, View

STORAGE_KEY = "blog-posts"

__all__ = [
    "ALL",
    "BlogPost",
    "CATEGORIES",
    "MIN_PUBLISH_DATE",
    "PRIORITIES",
    "PostFilter",
    "PostForm",
    "PostManager",
    "PostRouter",
    "Redirect",
    "STORAGE_KEY",
    "View",
    "date_picker_allows",
    "encode_image_file",
    "filter_posts",
]
