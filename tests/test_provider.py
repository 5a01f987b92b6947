"""Tests for provider configuration.

This module tests:
- Explicit values winning over UYUNI_* environment variables
- Accumulation of unknown and missing value diagnostics
- Client initialization failures
- Hand-over of the shared client to resources and data sources
"""

import pytest

from uyuni_provider.data_sources import UsersDataSource
from uyuni_provider.errors import ConfigurationError
from uyuni_provider.provider import UNKNOWN, ProviderConfig, UyuniProvider, is_unknown
from uyuni_provider.resources import UserResource

from .conftest import ADMIN_LOGIN, ADMIN_PASSWORD


class TestResolve:
    """Tests for resolving connection details."""

    def test_explicit_host_with_environment_credentials(self, monkeypatch):
        """Test explicit host combined with username/password from the environment."""
        monkeypatch.setenv("UYUNI_USERNAME", "u")
        monkeypatch.setenv("UYUNI_PASSWORD", "p")

        conn = UyuniProvider().resolve(ProviderConfig(host="h"))

        assert conn.server == "h"
        assert conn.user == "u"
        assert conn.password == "p"

    def test_fixed_transport_defaults(self):
        """Test that the connection allows insecure transport without CA pinning."""
        conn = UyuniProvider().resolve(
            ProviderConfig(host="h", username="u", password="p")
        )

        assert conn.insecure is True
        assert conn.cacert == ""

    def test_explicit_value_wins_over_environment(self, monkeypatch):
        """Test that configuration overrides environment variables."""
        monkeypatch.setenv("UYUNI_HOST", "env.example")
        monkeypatch.setenv("UYUNI_USERNAME", "env-user")
        monkeypatch.setenv("UYUNI_PASSWORD", "env-pass")

        conn = UyuniProvider().resolve(
            ProviderConfig(host="cfg.example", username="cfg-user", password="cfg-pass")
        )

        assert (conn.server, conn.user, conn.password) == (
            "cfg.example",
            "cfg-user",
            "cfg-pass",
        )

    def test_everything_from_environment(self, monkeypatch):
        """Test that an absent provider block falls back to the environment."""
        monkeypatch.setenv("UYUNI_HOST", "env.example")
        monkeypatch.setenv("UYUNI_USERNAME", "env-user")
        monkeypatch.setenv("UYUNI_PASSWORD", "env-pass")

        conn = UyuniProvider().resolve(None)

        assert conn.server == "env.example"

    def test_nothing_set_reports_three_missing_values(self):
        """Test that all missing values are reported, not only the first."""
        with pytest.raises(ConfigurationError) as exc_info:
            UyuniProvider().resolve(ProviderConfig())

        diagnostics = exc_info.value.diagnostics
        assert [d.attribute for d in diagnostics] == ["host", "username", "password"]
        assert [d.summary for d in diagnostics] == [
            "Missing Uyuni API Host",
            "Missing Uyuni API Username",
            "Missing Uyuni API Password",
        ]
        assert "UYUNI_HOST" in diagnostics[0].detail
        assert "UYUNI_USERNAME" in diagnostics[1].detail
        assert "UYUNI_PASSWORD" in diagnostics[2].detail

    def test_explicit_empty_value_is_missing(self, monkeypatch):
        """Test that an explicit empty string is not replaced by the environment."""
        monkeypatch.setenv("UYUNI_HOST", "env.example")

        with pytest.raises(ConfigurationError) as exc_info:
            UyuniProvider().resolve(ProviderConfig(host="", username="u", password="p"))

        assert [d.attribute for d in exc_info.value.diagnostics] == ["host"]

    def test_unknown_values_are_reported_together(self):
        """Test that every unknown value gets its own diagnostic."""
        config = ProviderConfig(host=UNKNOWN, username="u", password=UNKNOWN)

        with pytest.raises(ConfigurationError) as exc_info:
            UyuniProvider().resolve(config)

        diagnostics = exc_info.value.diagnostics
        assert [d.summary for d in diagnostics] == [
            "Unknown Uyuni API Host",
            "Unknown Uyuni API Password",
        ]
        assert "UYUNI_HOST environment variable" in diagnostics[0].detail

    def test_unknown_values_abort_before_environment_lookup(self, monkeypatch):
        """Test that an unknown value is not silently replaced by the environment."""
        monkeypatch.setenv("UYUNI_HOST", "env.example")

        with pytest.raises(ConfigurationError) as exc_info:
            UyuniProvider().resolve(ProviderConfig(host=UNKNOWN))

        assert len(exc_info.value.diagnostics) == 1

    def test_is_unknown(self):
        assert is_unknown(UNKNOWN)
        assert not is_unknown(None)
        assert not is_unknown("uyuni.example")

    def test_config_repr_masks_password(self):
        assert "s3cret" not in repr(ProviderConfig(password="s3cret"))


class TestConfigure:
    """Tests for configure() and client hand-over."""

    def test_configure_logs_in(self, provider, fake_uyuni):
        """Test that configure() builds a logged-in client."""
        client = provider.configure(
            ProviderConfig(host="uyuni.example", username=ADMIN_LOGIN, password=ADMIN_PASSWORD)
        )

        assert provider.client is client
        assert client.authenticated
        assert len(fake_uyuni.requests) == 1
        client.close()

    def test_login_failure_is_a_single_configuration_error(self, provider):
        """Test that client initialization failures carry the cause."""
        with pytest.raises(ConfigurationError) as exc_info:
            provider.configure(
                ProviderConfig(host="uyuni.example", username=ADMIN_LOGIN, password="wrong")
            )

        diagnostics = exc_info.value.diagnostics
        assert len(diagnostics) == 1
        assert diagnostics[0].summary == "Unable to Create Uyuni API Client"
        assert "Uyuni Client Error: Either the password" in diagnostics[0].detail
        assert provider.client is None

    def test_invalid_host_is_a_single_configuration_error(self, provider, fake_uyuni):
        """Test that a host that is not a valid URL is reported as a client error."""
        with pytest.raises(ConfigurationError) as exc_info:
            provider.configure(
                ProviderConfig(host="bad host:xx", username=ADMIN_LOGIN, password=ADMIN_PASSWORD)
            )

        diagnostics = exc_info.value.diagnostics
        assert len(diagnostics) == 1
        assert diagnostics[0].summary == "Unable to Create Uyuni API Client"
        assert "Uyuni Client Error: invalid server address 'bad host:xx'" in diagnostics[0].detail
        assert provider.client is None
        assert fake_uyuni.requests == []

    def test_validation_errors_prevent_login(self, provider, fake_uyuni):
        """Test that no request is made when values are missing."""
        with pytest.raises(ConfigurationError):
            provider.configure(ProviderConfig(host="uyuni.example"))

        assert fake_uyuni.requests == []

    def test_resources_and_data_sources_share_client(self, configured_provider):
        """Test that every component receives the same client."""
        (user_resource,) = configured_provider.resources()
        (users_data_source,) = configured_provider.data_sources()

        assert isinstance(user_resource, UserResource)
        assert isinstance(users_data_source, UsersDataSource)
        assert user_resource.client is configured_provider.client
        assert users_data_source.client is configured_provider.client


class TestMetadata:
    """Tests for provider metadata and schemas."""

    def test_metadata(self):
        provider = UyuniProvider(version="test")

        assert provider.metadata() == {"type_name": "uyuni", "version": "test"}

    def test_default_version_is_dev(self):
        assert UyuniProvider().version == "dev"

    def test_schema(self):
        schema = UyuniProvider().schema()

        assert set(schema.attributes) == {"host", "username", "password"}
        assert schema.required_attributes() == []
        assert schema.sensitive_attributes() == ["password"]

    def test_type_names(self, provider):
        (user_resource,) = provider.resources()
        (users_data_source,) = provider.data_sources()

        assert user_resource.type_name(provider.type_name) == "uyuni_user"
        assert users_data_source.type_name(provider.type_name) == "uyuni_users"
