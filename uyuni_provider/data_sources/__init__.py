"""Uyuni provider data sources."""

from .users import UserListing, UsersDataSource, UsersDataSourceModel

__all__ = [
    "UserListing",
    "UsersDataSource",
    "UsersDataSourceModel",
]
