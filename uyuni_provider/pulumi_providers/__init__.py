"""Pulumi dynamic providers for Uyuni resources."""

from .user import User, UserProvider
from .users import get_users

__all__ = [
    "User",
    "UserProvider",
    "get_users",
]
