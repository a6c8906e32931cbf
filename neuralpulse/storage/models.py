"""
Persistent state storage models.

These models describe the users, articles and uploaded images held by the
admin store, plus the snapshot written to the persistence slot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Role(Enum):
    """User roles."""
    ADMIN = "admin"
    AUTHOR = "author"


@dataclass(frozen=True)
class User:
    """
    Represents an admin panel account.

    Attributes:
        username: Login name (unique at registration time)
        password: Plaintext password
        role: Admin or author
        name: Display name, copied onto articles as the author
        email: Contact email
        bio: Optional short biography
        avatar: Optional avatar URL or data URI
        id: Store-assigned identifier
    """
    username: str
    password: str
    role: Role = Role.AUTHOR
    name: str = ""
    email: str = ""
    bio: Optional[str] = None
    avatar: Optional[str] = None
    id: str = ""

    @property
    def is_admin(self) -> bool:
        """Check if this user has the admin role."""
        return self.role is Role.ADMIN

    def __repr__(self) -> str:
        """Never expose the password in repr."""
        return (
            f"User(id='{self.id}', username='{self.username}', "
            f"role={self.role.value}, name='{self.name}')"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "role": self.role.value,
            "name": self.name,
            "email": self.email,
        }
        if self.bio is not None:
            data["bio"] = self.bio
        if self.avatar is not None:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            username=data["username"],
            password=data.get("password", ""),
            role=Role(data.get("role", Role.AUTHOR.value)),
            name=data.get("name", ""),
            email=data.get("email", ""),
            bio=data.get("bio"),
            avatar=data.get("avatar"),
        )


@dataclass(frozen=True)
class Article:
    """
    Represents a blog article.

    Attributes:
        title: Headline
        description: Short summary shown in listings
        content: Raw HTML body
        category: Free-text category
        date: Display date, e.g. "January 5, 2026"
        author: Author display name (copied from the user at creation)
        author_id: Id of the owning user (never validated)
        read_time: Free text, e.g. "5 min read"
        image: Featured image URL or data URI
        slug: URL slug (not enforced unique)
        published: Whether the article is publicly visible
        id: Store-assigned identifier
    """
    title: str
    description: str = ""
    content: str = ""
    category: str = ""
    date: str = ""
    author: str = ""
    author_id: str = ""
    read_time: str = ""
    image: str = ""
    slug: str = ""
    published: bool = False
    id: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "category": self.category,
            "date": self.date,
            "author": self.author,
            "authorId": self.author_id,
            "readTime": self.read_time,
            "image": self.image,
            "slug": self.slug,
            "published": self.published,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            content=data.get("content", ""),
            category=data.get("category", ""),
            date=data.get("date", ""),
            author=data.get("author", ""),
            author_id=str(data.get("authorId", "")),
            read_time=data.get("readTime", ""),
            image=data.get("image", ""),
            slug=data.get("slug", ""),
            published=bool(data.get("published", False)),
        )


@dataclass(frozen=True)
class UploadedImage:
    """
    Represents an image in the media library.

    Attributes:
        url: Data URI or remote URL
        name: Original file name
        uploaded_by: Id of the uploading user
        uploaded_at: ISO-8601 upload timestamp
        id: Store-assigned identifier
    """
    url: str
    name: str = ""
    uploaded_by: str = ""
    uploaded_at: str = ""
    id: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "url": self.url,
            "name": self.name,
            "uploadedBy": self.uploaded_by,
            "uploadedAt": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UploadedImage":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            url=data.get("url", ""),
            name=data.get("name", ""),
            uploaded_by=str(data.get("uploadedBy", "")),
            uploaded_at=data.get("uploadedAt", ""),
        )


DEMO_USERS: tuple[User, ...] = (
    User(
        id="1",
        username="admin",
        password="admin123",
        role=Role.ADMIN,
        name="Admin User",
        email="admin@neuralpulse.com",
        bio="Site administrator",
        avatar="https://images.unsplash.com/photo-1535713875002-d1d0cf377fde?q=80&w=200&h=200&auto=format&fit=crop",
    ),
    User(
        id="2",
        username="author",
        password="author123",
        role=Role.AUTHOR,
        name="Demo Author",
        email="author@neuralpulse.com",
        bio="Content creator",
        avatar="https://images.unsplash.com/photo-1494790108377-be9c29b29330?q=80&w=200&h=200&auto=format&fit=crop",
    ),
)


@dataclass(frozen=True)
class Snapshot:
    """
    Full contents of the admin store.

    Attributes:
        current_user: Session pointer (None when logged out)
        users: Users table
        articles: Articles table
        uploaded_images: Media library table
    """
    current_user: Optional[User] = None
    users: tuple[User, ...] = field(default_factory=lambda: DEMO_USERS)
    articles: tuple[Article, ...] = ()
    uploaded_images: tuple[UploadedImage, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "currentUser": self.current_user.to_dict() if self.current_user else None,
            "users": [user.to_dict() for user in self.users],
            "articles": [article.to_dict() for article in self.articles],
            "uploadedImages": [image.to_dict() for image in self.uploaded_images],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Snapshot":
        """
        Create from dictionary.

        Keys missing from the dictionary keep their default value, so a
        partially written snapshot still yields the demo users.
        """
        defaults = cls()

        current_user = defaults.current_user
        if "currentUser" in data:
            raw_user = data["currentUser"]
            current_user = User.from_dict(raw_user) if raw_user else None

        users = defaults.users
        if "users" in data:
            users = tuple(User.from_dict(item) for item in data["users"])

        articles = defaults.articles
        if "articles" in data:
            articles = tuple(Article.from_dict(item) for item in data["articles"])

        images = defaults.uploaded_images
        if "uploadedImages" in data:
            images = tuple(UploadedImage.from_dict(item) for item in data["uploadedImages"])

        return cls(
            current_user=current_user,
            users=users,
            articles=articles,
            uploaded_images=images,
        )
