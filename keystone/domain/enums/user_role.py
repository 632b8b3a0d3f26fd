"""User roles embedded in access tokens."""

from enum import Enum


class UserRole(str, Enum):
    """Role assigned to a user account.

    Roles are coarse-grained. Admins manage accounts (approve, suspend,
    delete), editors manage content, users only manage their own profile.
    """

    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"
