"""
Web element record used by the webauto helper.
"""

from __future__ import annotations

from ..core import Record, StringField, UUIDField
from ..validation import MinLengthValidator, RegexValidator

ELEMENT_TYPES = (
    "button",
    "input",
    "textarea",
    "p",
    "h1",
    "h2",
    "h3",
    "a",
    "img",
    "select",
    "checkbox",
)

ELEMENT_TYPE_LABELS = {
    "button": "Button",
    "input": "Input",
    "textarea": "Textarea",
    "p": "Paragraph",
    "h1": "Heading 1",
    "h2": "Heading 2",
    "h3": "Heading 3",
    "a": "Link",
    "img": "Image",
    "select": "Select",
    "checkbox": "Checkbox",
}


class WebElement(Record):
    internal_id = UUIDField()
    element_id = StringField(
        nullable=False,
        immutable=True,
        validators=[
            MinLengthValidator(1, "ID is required."),
            RegexValidator(
                r"^[A-Za-z0-9_-]+$",
                "ID can only contain letters, numbers, hyphens, and underscores.",
            ),
        ],
    )
    element_type = StringField(nullable=False, choices=ELEMENT_TYPES)
    value = StringField(default="")

    class Meta:
        name = "web_element"
        verbose_name = "element"
