"""Public blog lookups."""

from typing import Iterable, Optional

from ..storage.models import Article


def find_published_article(articles: Iterable[Article], slug: str) -> Optional[Article]:
    """First published article with the given slug, or None."""
    return next((a for a in articles if a.published and a.slug == slug), None)


def related_articles(
    articles: Iterable[Article],
    article: Article,
    limit: int = 2,
) -> list[Article]:
    """
    Pick published articles to show below an article.

    Same-category articles come first; if there are fewer than limit,
    the list is topped up from other categories. Table order is kept.
    """
    candidates = [a for a in articles if a.published and a.id != article.id]

    related = [a for a in candidates if a.category == article.category][:limit]
    if len(related) < limit:
        others = [a for a in candidates if a.category != article.category]
        related.extend(others[: limit - len(related)])

    return related
