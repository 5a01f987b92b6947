"""Uyuni HTTP API client and wire models."""

from .client import UyuniClient, init
from .models import (
    APIResponse,
    ConnectionDetails,
    CreateUserRequest,
    UserDetails,
    UserSummary,
)

__all__ = [
    "APIResponse",
    "ConnectionDetails",
    "CreateUserRequest",
    "UserDetails",
    "UserSummary",
    "UyuniClient",
    "init",
]
