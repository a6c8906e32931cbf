"""
In-process admin store.

Single source of truth for users, articles, uploaded images and the
session pointer. Every mutation is persisted through the injected backend
and then broadcast to subscribers.
"""

import dataclasses
import logging
import uuid
from enum import Enum, auto
from typing import Any, Callable, Mapping, Optional, TypeVar

from .backends import SnapshotBackend
from .models import Article, Role, Snapshot, UploadedImage, User
from .serialization import StateStoreError, encode_snapshot

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]

_Entity = TypeVar("_Entity", User, Article, UploadedImage)


class OperationResult(Enum):
    """Outcome of an update or delete."""

    # Entity found and changed
    OK = auto()

    # No entity with that id; nothing changed
    NOT_FOUND = auto()

    def __bool__(self) -> bool:
        return self is OperationResult.OK


def _default_id() -> str:
    return str(uuid.uuid4())


class AdminStore:
    """
    Admin panel state store.

    Features:
    - Rehydrates from the backend on construction, falling back to demo users
    - Persists the full snapshot after every change
    - Notifies subscribers with the full snapshot after every change
    - Operations never raise for missing or duplicate entities

    Usage:
        store = AdminStore(JsonFileBackend(Path("data/neural-pulse.json")))

        if store.login("admin", "admin123"):
            article_id = store.add_article(Article(title="Hello"))
            store.update_article(article_id, {"published": True})
    """

    def __init__(
        self,
        backend: SnapshotBackend,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the store.

        Args:
            backend: Persistence backend holding the snapshot slot
            id_factory: Callable returning a fresh unique id (default: UUID4)
        """
        self.backend = backend
        self._new_id = id_factory or _default_id
        self._listeners: list[Listener] = []
        self._state = self._rehydrate()

    def _rehydrate(self) -> Snapshot:
        """Load the persisted snapshot, or fall back to the initial state."""
        try:
            snapshot = self.backend.load()
        except StateStoreError as e:
            logger.warning(f"Could not restore stored state, using defaults: {e}")
            return Snapshot()

        if snapshot is None:
            logger.info("No stored state found, starting with demo users")
            return Snapshot()

        logger.info(
            f"Restored {len(snapshot.users)} users, {len(snapshot.articles)} articles, "
            f"{len(snapshot.uploaded_images)} images"
        )
        return snapshot

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> Snapshot:
        return self._state

    @property
    def current_user(self) -> Optional[User]:
        return self._state.current_user

    @property
    def is_authenticated(self) -> bool:
        return self._state.current_user is not None

    @property
    def users(self) -> tuple[User, ...]:
        return self._state.users

    @property
    def articles(self) -> tuple[Article, ...]:
        return self._state.articles

    @property
    def uploaded_images(self) -> tuple[UploadedImage, ...]:
        return self._state.uploaded_images

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the full snapshot after each change.

        Args:
            listener: Callable taking a Snapshot

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, **changes: Any) -> None:
        """
        Apply table changes, persist, then notify listeners.

        The new state is serialized before it replaces the current one, so a
        value JSON cannot hold leaves the store untouched.

        Raises:
            SnapshotEncodeError: If the changed state cannot be serialized
        """
        new_state = dataclasses.replace(self._state, **changes)
        raw = encode_snapshot(new_state)
        self._state = new_state

        try:
            self.backend.save_encoded(raw)
        except StateStoreError:
            logger.exception("Failed to persist state; keeping in-memory copy")

        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed")

    def _merge(self, entity: _Entity, patch: Mapping[str, Any]) -> _Entity:
        """Shallow-merge known, mutable fields of patch onto entity."""
        allowed = {f.name for f in dataclasses.fields(entity)} - {"id"}
        accepted = {}
        for name, value in patch.items():
            if name == "role" and not isinstance(value, Role):
                try:
                    value = Role(value)
                except ValueError:
                    logger.warning(f"Ignoring unknown role {value!r} in patch")
                    continue
            if name in allowed:
                accepted[name] = value
            else:
                logger.warning(
                    f"Ignoring field '{name}' in {type(entity).__name__} patch"
                )
        return dataclasses.replace(entity, **accepted)

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> bool:
        """
        Start a session for the user matching both credentials exactly.

        Returns:
            True on match, False otherwise (session left untouched)
        """
        for user in self._state.users:
            if user.username == username and user.password == password:
                self._commit(current_user=user)
                logger.info(f"User '{username}' logged in")
                return True

        logger.info(f"Failed login attempt for '{username}'")
        return False

    def logout(self) -> None:
        """Clear the session pointer."""
        if self._state.current_user is not None:
            logger.info(f"User '{self._state.current_user.username}' logged out")
        self._commit(current_user=None)

    def register(self, user: User) -> bool:
        """
        Add a new user. Does not log them in.

        Args:
            user: User to add; any id it carries is replaced

        Returns:
            False if the username is taken or the role is unknown,
            True otherwise
        """
        if not isinstance(user.role, Role):
            try:
                user = dataclasses.replace(user, role=Role(user.role))
            except ValueError:
                logger.warning(f"Registration rejected, unknown role {user.role!r}")
                return False

        if any(u.username == user.username for u in self._state.users):
            logger.info(f"Registration rejected, username '{user.username}' taken")
            return False

        new_user = dataclasses.replace(user, id=self._new_id())
        self._commit(users=self._state.users + (new_user,))
        logger.info(f"Registered user '{new_user.username}' ({new_user.role.value})")
        return True

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._state.users if u.id == user_id), None)

    def update_user(self, user_id: str, patch: Mapping[str, Any]) -> OperationResult:
        """
        Merge patch onto the user with the given id.

        The session pointer gets the same merge when it is that user.
        """
        target = self.get_user(user_id)
        if target is None:
            return OperationResult.NOT_FOUND

        users = tuple(
            self._merge(u, patch) if u.id == user_id else u for u in self._state.users
        )

        current = self._state.current_user
        if current is not None and current.id == user_id:
            current = self._merge(current, patch)

        self._commit(users=users, current_user=current)
        logger.debug(f"Updated user {user_id}")
        return OperationResult.OK

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------

    def add_article(self, article: Article) -> str:
        """
        Append an article under a fresh id.

        Returns:
            The generated article id
        """
        article_id = self._new_id()
        new_article = dataclasses.replace(article, id=article_id)
        self._commit(articles=self._state.articles + (new_article,))
        logger.debug(f"Added article {article_id} '{new_article.title}'")
        return article_id

    def update_article(self, article_id: str, patch: Mapping[str, Any]) -> OperationResult:
        """Merge patch onto the article with the given id."""
        if self.get_article(article_id) is None:
            return OperationResult.NOT_FOUND

        articles = tuple(
            self._merge(a, patch) if a.id == article_id else a
            for a in self._state.articles
        )
        self._commit(articles=articles)
        logger.debug(f"Updated article {article_id}")
        return OperationResult.OK

    def delete_article(self, article_id: str) -> OperationResult:
        """Remove the article with the given id. Nothing cascades."""
        if self.get_article(article_id) is None:
            return OperationResult.NOT_FOUND

        self._commit(
            articles=tuple(a for a in self._state.articles if a.id != article_id)
        )
        logger.debug(f"Deleted article {article_id}")
        return OperationResult.OK

    def get_article(self, article_id: str) -> Optional[Article]:
        return next((a for a in self._state.articles if a.id == article_id), None)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def add_image(self, image: UploadedImage) -> str:
        """
        Append an image to the media library under a fresh id.

        Returns:
            The generated image id, usable immediately with get_image
        """
        image_id = self._new_id()
        new_image = dataclasses.replace(image, id=image_id)
        self._commit(uploaded_images=self._state.uploaded_images + (new_image,))
        logger.debug(f"Added image {image_id} '{new_image.name}'")
        return image_id

    def delete_image(self, image_id: str) -> OperationResult:
        """
        Remove the image with the given id.

        Articles keep whatever URL they embedded.
        """
        if self.get_image(image_id) is None:
            return OperationResult.NOT_FOUND

        self._commit(
            uploaded_images=tuple(
                img for img in self._state.uploaded_images if img.id != image_id
            )
        )
        logger.debug(f"Deleted image {image_id}")
        return OperationResult.OK

    def get_image(self, image_id: str) -> Optional[UploadedImage]:
        return next((img for img in self._state.uploaded_images if img.id == image_id), None)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """
        Restore demo users, empty tables and no session.

        WARNING: This is destructive. Use only for testing or reset.
        """
        initial = Snapshot()
        self._commit(
            current_user=initial.current_user,
            users=initial.users,
            articles=initial.articles,
            uploaded_images=initial.uploaded_images,
        )
        logger.warning("Store reset to demo data")
