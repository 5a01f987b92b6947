"""Base class shared by resources and data sources."""

from ..api import UyuniClient
from ..diagnostics import Diagnostic
from ..errors import ConfigurationError
from ..schema import Schema


class ProviderResource:
    """Common plumbing for anything that talks to Uyuni through the provider.

    The configured client is handed over through the constructor, or later
    through ``configure()`` once the provider has been configured.

    Attributes:
        type_suffix: Appended to the provider type name to form the type name
    """

    type_suffix = ""

    def __init__(self, client: UyuniClient | None = None):
        self.client = client

    def type_name(self, provider_type_name: str) -> str:
        return provider_type_name + self.type_suffix

    def schema(self) -> Schema:
        raise NotImplementedError

    def configure(self, provider_data: UyuniClient | None) -> None:
        """Attach the provider's client.

        A None value is ignored, the provider may not be configured yet.

        Raises:
            ConfigurationError: If provider_data is not a UyuniClient
        """
        if provider_data is None:
            return
        if not isinstance(provider_data, UyuniClient):
            raise ConfigurationError(
                [
                    Diagnostic(
                        summary=f"Unexpected {type(self).__name__} Configure Type",
                        detail=(
                            f"Expected UyuniClient, got: {type(provider_data).__name__}. "
                            "Please report this issue to the provider developers."
                        ),
                    )
                ]
            )
        self.client = provider_data

    def _require_client(self) -> UyuniClient:
        if self.client is None:
            raise ConfigurationError(
                [
                    Diagnostic(
                        summary="Unconfigured Uyuni API Client",
                        detail=(
                            f"{type(self).__name__} was used before the provider was configured. "
                            "Configure the provider first."
                        ),
                    )
                ]
            )
        return self.client
