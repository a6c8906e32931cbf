"""Article, blog, media and account services built on the admin store."""

from .accounts import RegistrationResult, list_users, register_account, update_profile
from .articles import (
    can_delete_article,
    format_display_date,
    generate_slug,
    new_article_for,
    save_article,
    split_by_status,
    visible_articles,
)
from .blog import find_published_article, related_articles
from .errors import ContentError, NotFoundError, PermissionDeniedError
from .media import attach_featured_image, build_image, visible_images

__all__ = [
    "RegistrationResult",
    "register_account",
    "update_profile",
    "list_users",
    "generate_slug",
    "format_display_date",
    "new_article_for",
    "save_article",
    "visible_articles",
    "split_by_status",
    "can_delete_article",
    "find_published_article",
    "related_articles",
    "build_image",
    "visible_images",
    "attach_featured_image",
    "ContentError",
    "NotFoundError",
    "PermissionDeniedError",
]
