"""
Blog post record.
"""

from __future__ import annotations

from ..core import BooleanField, DateTimeField, Record, StringField, UUIDField
from ..validation import MinLengthValidator

CATEGORIES = ("Technology", "Lifestyle", "Travel", "Food", "Business")
PRIORITIES = ("Low", "Medium", "High")


class BlogPost(Record):
    id = UUIDField()
    title = StringField(
        nullable=False,
        validators=[MinLengthValidator(3, "Title must be at least 3 characters long.")],
    )
    content = StringField(
        nullable=False,
        validators=[MinLengthValidator(10, "Content must be at least 10 characters long.")],
    )
    author = StringField(
        nullable=False,
        validators=[MinLengthValidator(2, "Author name is required.")],
    )
    image_url = StringField(help_text="Remote URL or data: URL of the cover image.")
    category = StringField(nullable=False, choices=CATEGORIES)
    priority = StringField(nullable=False, choices=PRIORITIES)
    is_published = BooleanField(default=False)
    publish_date = DateTimeField(nullable=False)

    class Meta:
        name = "blog_post"
        verbose_name = "post"
