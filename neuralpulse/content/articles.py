"""
Article editing and dashboard helpers.

Covers what the editor does before handing an article to the store
(slug and date defaults) and how the dashboard decides which articles a
user sees and may delete.
"""

import dataclasses
import logging
import re
from datetime import date
from typing import Iterable, Optional

from ..storage.models import Article, User
from ..storage.state_store import AdminStore
from .errors import NotFoundError

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")


def generate_slug(title: str) -> str:
    """
    Build a URL slug from a title.

    Lower-cases, drops punctuation and joins words with hyphens:
    "Hello, World!  AI" -> "hello-world-ai".
    """
    slug = _NON_SLUG_CHARS.sub("", title.lower())
    return _WHITESPACE.sub("-", slug)


def format_display_date(day: date) -> str:
    """Format a date the way articles display it, e.g. "January 5, 2026"."""
    return f"{day:%B} {day.day}, {day.year}"


def new_article_for(user: User) -> Article:
    """Blank editor draft owned by user."""
    return Article(title="", author=user.name, author_id=user.id)


def save_article(
    store: AdminStore,
    article: Article,
    article_id: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Save an article from the editor.

    An empty slug is generated from the title and an empty date is set to
    today's display date.

    Args:
        store: Admin store
        article: Edited article fields
        article_id: Id of the article being edited, or None to create one
        today: Date used for an empty date field (default: today)

    Returns:
        Id of the saved article

    Raises:
        NotFoundError: If article_id does not exist
    """
    changes = {}
    if not article.slug:
        changes["slug"] = generate_slug(article.title)
    if not article.date:
        changes["date"] = format_display_date(today or date.today())
    article = dataclasses.replace(article, **changes)

    if article_id is None:
        new_id = store.add_article(article)
        logger.info(f"Created article {new_id} '{article.title}'")
        return new_id

    patch = {
        f.name: getattr(article, f.name)
        for f in dataclasses.fields(article)
        if f.name != "id"
    }
    if not store.update_article(article_id, patch):
        raise NotFoundError(f"Article {article_id} does not exist")

    logger.info(f"Updated article {article_id} '{article.title}'")
    return article_id


def visible_articles(user: User, articles: Iterable[Article]) -> list[Article]:
    """Articles shown on a user's dashboard: all for admins, own for authors."""
    if user.is_admin:
        return list(articles)
    return [a for a in articles if a.author_id == user.id]


def split_by_status(articles: Iterable[Article]) -> tuple[list[Article], list[Article]]:
    """
    Split articles into published and draft lists.

    Returns:
        (published, drafts), each in input order
    """
    published, drafts = [], []
    for article in articles:
        (published if article.published else drafts).append(article)
    return published, drafts


def can_delete_article(user: Optional[User], article: Article) -> bool:
    """
    Admins may delete any article; authors only their own.

    Ownership is the article's author_id matched against the user's id.
    The dashboard's earlier check compared author_id with the article's own
    id, which never identified the author.
    """
    if user is None:
        return False
    return user.is_admin or article.author_id == user.id
