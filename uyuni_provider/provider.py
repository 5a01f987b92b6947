"""
Uyuni provider - resolves connection settings and builds the shared API client.

Configuration runs once per provider lifecycle. Explicit values win over the
UYUNI_* environment variables; every problem is collected before aborting so
the user sees all of them at once.
"""

import logging

import httpx
from pulumi.runtime.rpc import UNKNOWN
from pydantic import BaseModel, Field

from . import api
from .api import ConnectionDetails, UyuniClient
from .data_sources import UsersDataSource
from .diagnostics import Diagnostic, Diagnostics
from .errors import ConfigurationError, UyuniAPIError
from .resources import UserResource
from .schema import Attribute, Schema
from .settings import UyuniSettings

logger = logging.getLogger(__name__)

TYPE_NAME = "uyuni"

# attribute -> (label used in messages, environment variable)
CONNECTION_ATTRIBUTES = {
    "host": ("Host", "UYUNI_HOST"),
    "username": ("Username", "UYUNI_USERNAME"),
    "password": ("Password", "UYUNI_PASSWORD"),
}


def is_unknown(value: object) -> bool:
    """Whether a configuration value is not known yet (depends on another resource)."""
    return value == UNKNOWN


class ProviderConfig(BaseModel):
    """Provider block configuration.

    Each attribute may be None (not set) or UNKNOWN (not resolved yet).
    """

    host: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)


class UyuniProvider:
    """The Uyuni provider.

    Usage:
        provider = UyuniProvider(version="1.0.0")
        provider.configure(ProviderConfig(host="uyuni.example"))
        user_resource, = provider.resources()
        users_data_source, = provider.data_sources()

    Attributes:
        version: "dev" for local builds, "test" in tests, the release otherwise
        client: Client built by configure(), None before that
    """

    type_name = TYPE_NAME

    def __init__(
        self,
        version: str = "dev",
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the provider.

        Args:
            version: Provider version
            transport: Optional httpx transport for the API client
        """
        self.version = version
        self.client: UyuniClient | None = None
        self._transport = transport

    def metadata(self) -> dict[str, str]:
        return {"type_name": self.type_name, "version": self.version}

    def schema(self) -> Schema:
        return Schema(
            attributes={
                "host": Attribute(optional=True),
                "username": Attribute(optional=True),
                "password": Attribute(optional=True, sensitive=True),
            }
        )

    def resolve(self, config: ProviderConfig | None = None) -> ConnectionDetails:
        """
        Resolve connection details from configuration and environment.

        Args:
            config: Provider block configuration (None when the block is empty)

        Returns:
            ConnectionDetails with insecure transport and no CA certificate

        Raises:
            ConfigurationError: With one diagnostic per unknown or missing value
        """
        config = config or ProviderConfig()
        diags = Diagnostics()

        for attribute, (label, env_var) in CONNECTION_ATTRIBUTES.items():
            if is_unknown(getattr(config, attribute)):
                diags.add_attribute_error(
                    attribute,
                    f"Unknown Uyuni API {label}",
                    f"The provider cannot create the Uyuni API client as there is an unknown "
                    f"configuration value for the Uyuni API {attribute}. Either target apply "
                    f"the source of the value first, set the value statically in the "
                    f"configuration, or use the {env_var} environment variable.",
                )
        diags.raise_for_errors()

        env = UyuniSettings()
        resolved = {}
        for attribute in CONNECTION_ATTRIBUTES:
            value = getattr(config, attribute)
            resolved[attribute] = getattr(env, attribute) if value is None else value

        for attribute, (label, env_var) in CONNECTION_ATTRIBUTES.items():
            if not resolved[attribute]:
                diags.add_attribute_error(
                    attribute,
                    f"Missing Uyuni API {label}",
                    f"The provider cannot create the Uyuni API client as there is a missing "
                    f"or empty value for the Uyuni API {attribute}. Set the {attribute} value "
                    f"in the configuration or use the {env_var} environment variable. If "
                    f"either is already set, ensure the value is not empty.",
                )
        diags.raise_for_errors()

        return ConnectionDetails(
            server=resolved["host"],
            user=resolved["username"],
            password=resolved["password"],
            cacert="",
            insecure=True,
        )

    def configure(self, config: ProviderConfig | None = None) -> UyuniClient:
        """
        Configure the provider and log in to the Uyuni server.

        Args:
            config: Provider block configuration

        Returns:
            The shared client, also stored on the provider

        Raises:
            ConfigurationError: If values are unknown or missing, or login fails
        """
        logger.info("Configuring Uyuni client")
        conn = self.resolve(config)

        logger.debug(
            f"Creating Uyuni client (uyuni_host={conn.server}, "
            f"uyuni_username={conn.user}, uyuni_password=***)"
        )
        settings = UyuniSettings()
        try:
            client = api.init(
                conn, timeout=settings.request_timeout, transport=self._transport
            )
        except UyuniAPIError as e:
            raise ConfigurationError(
                [
                    Diagnostic(
                        summary="Unable to Create Uyuni API Client",
                        detail=(
                            "An unexpected error occurred when creating the Uyuni API client. "
                            "If the error is not clear, please contact the provider developers.\n\n"
                            f"Uyuni Client Error: {e}"
                        ),
                    )
                ]
            ) from e

        self.client = client
        logger.info(f"Configured Uyuni client for {conn.server}")
        return client

    def resources(self) -> list[UserResource]:
        return [UserResource(self.client)]

    def data_sources(self) -> list[UsersDataSource]:
        return [UsersDataSource(self.client)]
