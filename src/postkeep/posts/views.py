"""
Navigation between the list, detail, create and edit views.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from ..persistence import NotFoundError
from ..utils import get_logger
from .forms import PostForm
from .manager import PostManager
from .models import BlogPost
from .search import PostFilter

LIST_PATH = "/"


@dataclass(frozen=True)
class View:
    name: str
    path: str
    posts: Tuple[BlogPost, ...] = ()
    post: Optional[BlogPost] = None
    form: Optional[PostForm] = None
    empty_message: Optional[str] = None


@dataclass(frozen=True)
class Redirect:
    location: str
    reason: str = ""


Resolution = Union[View, Redirect]


class PostRouter:
    """
    Resolves paths to views. A detail or edit path naming an unknown post
    redirects to the list view.
    """

    def __init__(self, manager: PostManager) -> None:
        self.manager = manager
        self.logger = get_logger("posts.views")
        self._routes: List[Tuple[re.Pattern[str], Callable[[re.Match[str], Optional[PostFilter]], Resolution]]] = [
            (re.compile(r"^/$"), lambda match, post_filter: self.list_view(post_filter)),
            (re.compile(r"^/posts/new/?$"), lambda match, post_filter: self.create_view()),
            (
                re.compile(r"^/posts/edit/(?P<post_id>[^/]+)/?$"),
                lambda match, post_filter: self.edit_view(match["post_id"]),
            ),
            (
                re.compile(r"^/posts/(?P<post_id>[^/]+)/?$"),
                lambda match, post_filter: self.detail_view(match["post_id"]),
            ),
        ]

    def resolve(self, path: str, post_filter: Optional[PostFilter] = None) -> Resolution:
        for pattern, handler in self._routes:
            match = pattern.match(path)
            if match is None:
                continue
            return handler(match, post_filter)
        self.logger.info("No route for %s", path)
        return Redirect(LIST_PATH, reason=f"No page at {path}")

    # ------------------------------------------------------------------ #
    def list_view(self, post_filter: Optional[PostFilter] = None) -> View:
        post_filter = post_filter or PostFilter()
        everything = self.manager.all()
        visible = post_filter.apply(everything)
        empty_message = None
        if not everything:
            empty_message = "No posts created yet."
        elif not visible:
            empty_message = "No posts match the current filters."
        return View(name="list", path=LIST_PATH, posts=tuple(visible), empty_message=empty_message)

    def create_view(self) -> View:
        return View(name="create", path="/posts/new", form=PostForm(self.manager))

    def detail_view(self, post_id: str) -> Resolution:
        try:
            post = self.manager.get_or_raise(post_id)
        except NotFoundError as exc:
            return self._not_found(exc)
        return View(name="detail", path=f"/posts/{post_id}", post=post)

    def edit_view(self, post_id: str) -> Resolution:
        try:
            post = self.manager.get_or_raise(post_id)
        except NotFoundError as exc:
            return self._not_found(exc)
        return View(name="edit", path=f"/posts/edit/{post_id}", post=post, form=PostForm(self.manager, post))

    # ------------------------------------------------------------------ #
    def _not_found(self, exc: NotFoundError) -> Redirect:
        self.logger.info("Redirecting to list: %s", exc)
        return Redirect(LIST_PATH, reason=str(exc))
