"""Users listing for Pulumi programs."""

from ..data_sources import UserListing
from ..provider import ProviderConfig, UyuniProvider


def get_users(config: ProviderConfig | None = None) -> list[UserListing]:
    """
    List every Uyuni user, in server order.

    Args:
        config: Provider configuration (defaults to UYUNI_* variables)

    Returns:
        One UserListing (id, login) per user
    """
    provider = UyuniProvider()
    client = provider.configure(config)
    try:
        return provider.data_sources()[0].read().users
    finally:
        client.close()
