"""
Utility helpers for running the PostKeep blog example end-to-end.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from postkeep import PostFilter, PostKeep

SAMPLE_POSTS = [
    {
        "title": "Introducing PostKeep",
        "content": "This guide walks through creating, editing and filtering posts.",
        "author": "Alice Carter",
        "category": "Technology",
        "priority": "High",
        "is_published": True,
        "publish_date": datetime(2024, 6, 1, tzinfo=timezone.utc),
    },
    {
        "title": "A Week in Lisbon",
        "content": "Trams, tiles and far too many pastries along the river.",
        "author": "Brian Kim",
        "category": "Travel",
        "priority": "Low",
        "is_published": True,
        "publish_date": datetime(2024, 1, 1, tzinfo=timezone.utc),
    },
    {
        "title": "Quarterly Planning Notes",
        "content": "Draft agenda for the next planning session, not yet public.",
        "author": "Alice Carter",
        "category": "Business",
        "priority": "Medium",
        "is_published": False,
        "publish_date": datetime(2024, 3, 15, tzinfo=timezone.utc),
    },
]

SAMPLE_ELEMENTS = [
    {"element_id": "login-btn", "element_type": "button", "value": "Log in"},
    {"element_id": "username", "element_type": "input"},
    {"element_id": "docs-link", "element_type": "a", "value": "https://example.com/docs"},
]


def bootstrap_app(dsn: str = "memory://") -> PostKeep:
    """
    Open a PostKeep session over the given store.
    """

    return PostKeep.open(dsn)


def seed_sample_data(app: PostKeep) -> Dict[str, List[Dict[str, Any]]]:
    """
    Populate posts and elements to make the example interactive.
    """

    posts = []
    for payload in SAMPLE_POSTS:
        outcome = app.posts.create(payload)
        if not outcome.ok:
            raise RuntimeError(f"Sample post rejected: {outcome.errors}")
        posts.append(outcome.record)

    elements = []
    for payload in SAMPLE_ELEMENTS:
        outcome = app.elements.create(payload)
        if not outcome.ok:
            raise RuntimeError(f"Sample element rejected: {outcome.errors}")
        elements.append(outcome.record)

    return {
        "posts": [post.to_storage() for post in posts],
        "elements": [element.to_storage() for element in elements],
    }


def fetch_recent_posts(app: PostKeep, limit: int = 5) -> List[Dict[str, Any]]:
    """
    Retrieve a feed of published posts, newest first.
    """

    posts = app.post_collection.query().filter(is_published=True).order_by("-publish_date").limit(limit)
    return [
        {
            "id": post.id,
            "title": post.title,
            "author": post.author,
            "category": post.category,
            "published": post.is_published,
            "publish_date": post.publish_date.date().isoformat(),
        }
        for post in posts
    ]


def search_feed(app: PostKeep, search_term: str) -> List[str]:
    """
    Titles matching ``search_term`` across all posts, as the list view shows them.
    """

    view = app.router.list_view(PostFilter(search_term=search_term))
    return [post.title for post in view.posts]


def run_demo(dsn: str = "memory://") -> List[Dict[str, Any]]:
    """
    Open the store, seed data, and return a rendered feed.
    """

    app = bootstrap_app(dsn=dsn)
    try:
        seed_sample_data(app)
        return fetch_recent_posts(app)
    finally:
        app.close()


if __name__ == "__main__":
    feed = run_demo("sqlite:///blog_demo.db")
    for entry in feed:
        print(f"[{entry['category']}] {entry['title']} by {entry['author']} ({entry['publish_date']})")
