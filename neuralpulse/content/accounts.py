"""
Account management: registration, profile edits and the user list.

Passwords are stored and compared in plaintext.
"""

import logging
from enum import Enum, auto
from typing import Optional

from ..storage.models import Role, User
from ..storage.state_store import AdminStore
from .errors import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


class RegistrationResult(Enum):
    """Outcome of a registration attempt."""
    OK = auto()
    PASSWORD_MISMATCH = auto()
    USERNAME_TAKEN = auto()


def register_account(
    store: AdminStore,
    username: str,
    password: str,
    confirm_password: str,
    name: str,
    email: str,
    role: Role = Role.AUTHOR,
) -> RegistrationResult:
    """
    Register a new account from the sign-up form.

    The password confirmation is checked before the username.
    The new user is not logged in.
    """
    if password != confirm_password:
        return RegistrationResult.PASSWORD_MISMATCH

    user = User(
        username=username,
        password=password,
        role=role,
        name=name,
        email=email,
    )
    if not store.register(user):
        return RegistrationResult.USERNAME_TAKEN

    return RegistrationResult.OK


def update_profile(
    store: AdminStore,
    user: User,
    name: str,
    email: str,
    bio: str = "",
    avatar: str = "",
) -> None:
    """
    Save the profile form for user.

    Only name, email, bio and avatar are editable here.

    Raises:
        NotFoundError: If the user no longer exists
    """
    patch = {"name": name, "email": email, "bio": bio, "avatar": avatar}
    if not store.update_user(user.id, patch):
        raise NotFoundError(f"User {user.id} does not exist")

    logger.info(f"Profile updated for '{user.username}'")


def list_users(store: AdminStore, current_user: Optional[User] = None) -> list[User]:
    """
    All registered users, for the admin user list.

    Args:
        store: Admin store
        current_user: User asking (default: the store's session user)

    Raises:
        PermissionDeniedError: If the user is not an admin or nobody is logged in
    """
    user = current_user if current_user is not None else store.current_user
    if user is None or not user.is_admin:
        raise PermissionDeniedError("Only administrators can list users")
    return list(store.users)
