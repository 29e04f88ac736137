"""
Element renderer: maps each element type to the widget shown in the preview.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Callable, Dict, Iterable, Optional, Tuple

from .models import WebElement

PLACEHOLDER_IMAGE = "https://picsum.photos/seed/1/200/300"
VOID_TAGS = frozenset({"input", "img"})


@dataclass(frozen=True)
class Widget:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: Tuple["Widget", ...] = ()

    def to_html(self) -> str:
        attrs = "".join(f' {name}="{escape(value, quote=True)}"' for name, value in self.attrs.items())
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        inner = escape(self.text) if self.text is not None else ""
        inner += "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


def _button(element: WebElement) -> Widget:
    return Widget("button", {"id": element.element_id}, element.value or element.element_id)


def _input(element: WebElement) -> Widget:
    return Widget(
        "input",
        {"id": element.element_id, "value": element.value or "", "placeholder": element.element_id},
    )


def _textarea(element: WebElement) -> Widget:
    return Widget("textarea", {"id": element.element_id, "placeholder": element.element_id}, element.value or "")


def _paragraph(element: WebElement) -> Widget:
    text = element.value or f"This is a paragraph with id: {element.element_id}"
    return Widget("p", {"id": element.element_id}, text)


def _heading(level: int) -> Callable[[WebElement], Widget]:
    def render(element: WebElement) -> Widget:
        return Widget(f"h{level}", {"id": element.element_id}, element.value or element.element_id)

    return render


def _link(element: WebElement) -> Widget:
    text = f"Link to {element.value}" if element.value else element.element_id
    return Widget("a", {"id": element.element_id, "href": element.value or "#"}, text)


def _image(element: WebElement) -> Widget:
    return Widget(
        "img",
        {
            "id": element.element_id,
            "src": element.value or PLACEHOLDER_IMAGE,
            "alt": element.element_id,
            "width": "200",
            "height": "300",
        },
    )


def _select(element: WebElement) -> Widget:
    options = (
        Widget("option", {"value": "", "disabled": "disabled", "selected": "selected"}, element.value or "Select an option"),
        Widget("option", {"value": "option1"}, "Option 1"),
        Widget("option", {"value": "option2"}, "Option 2"),
    )
    return Widget("select", {"id": element.element_id}, children=options)


def _checkbox(element: WebElement) -> Widget:
    return Widget(
        "div",
        children=(
            Widget("input", {"type": "checkbox", "id": element.element_id}),
            Widget("label", {"for": element.element_id}, element.value or element.element_id),
        ),
    )


RENDERERS: Dict[str, Callable[[WebElement], Widget]] = {
    "button": _button,
    "input": _input,
    "textarea": _textarea,
    "p": _paragraph,
    "h1": _heading(1),
    "h2": _heading(2),
    "h3": _heading(3),
    "a": _link,
    "img": _image,
    "select": _select,
    "checkbox": _checkbox,
}

def render_element(element: WebElement) -> Optional[Widget]:
    """
    Render one element. Unrecognised types render nothing.
    """
    renderer = RENDERERS.get(element.element_type)
    if renderer is None:
        return None
    return renderer(element)


def render_preview(elements: Iterable[WebElement]) -> Widget:
    """
    Render the preview pane holding every element, in collection order.
    """
    widgets = tuple(widget for widget in map(render_element, elements) if widget is not None)
    if not widgets:
        return Widget(
            "div",
            {"id": "no-preview-message"},
            children=(
                Widget("p", text="No elements to preview."),
                Widget("p", text='Go to the "Manage Elements" tab to create some.'),
            ),
        )
    return Widget("div", {"id": "preview-pane"}, children=widgets)
