"""
Uyuni Provider - manage Uyuni users as infrastructure code.

Exposes a ``uyuni_user`` resource (create, refresh, delete) and a
``uyuni_users`` listing data source on top of the Uyuni HTTP API, plus
Pulumi dynamic providers wrapping both.
"""

from .provider import ProviderConfig, UyuniProvider
from .settings import UyuniSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "ProviderConfig",
    "UyuniProvider",
    "UyuniSettings",
    "get_settings",
    "reload_settings",
]
