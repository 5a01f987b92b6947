"""Uyuni provider resources."""

from .base import ProviderResource
from .user import UserModel, UserResource

__all__ = [
    "ProviderResource",
    "UserModel",
    "UserResource",
]
