"""
Media library helpers.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from ..storage.models import UploadedImage, User
from ..storage.state_store import AdminStore
from .errors import NotFoundError

logger = logging.getLogger(__name__)


def build_image(
    url: str,
    name: str,
    uploaded_by: str,
    uploaded_at: Optional[datetime] = None,
) -> UploadedImage:
    """
    Create an image record ready for AdminStore.add_image.

    Args:
        url: Data URI or remote URL
        name: Original file name
        uploaded_by: Id of the uploading user
        uploaded_at: Upload time (default: now, UTC)
    """
    stamp = uploaded_at or datetime.now(timezone.utc)
    return UploadedImage(
        url=url,
        name=name,
        uploaded_by=uploaded_by,
        uploaded_at=stamp.isoformat(),
    )


def visible_images(user: User, images: Iterable[UploadedImage]) -> list[UploadedImage]:
    """Images a user can browse: all for admins, own uploads for authors."""
    if user.is_admin:
        return list(images)
    return [img for img in images if img.uploaded_by == user.id]


def attach_featured_image(store: AdminStore, article_id: str, image_id: str) -> None:
    """
    Use a library image as an article's featured image.

    The image URL is copied onto the article, so deleting the image later
    leaves the article intact.

    Raises:
        NotFoundError: If the image or the article does not exist
    """
    image = store.get_image(image_id)
    if image is None:
        raise NotFoundError(f"Image {image_id} does not exist")

    if not store.update_article(article_id, {"image": image.url}):
        raise NotFoundError(f"Article {article_id} does not exist")

    logger.debug(f"Set image {image_id} as featured image of article {article_id}")
