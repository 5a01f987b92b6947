"""Pulumi dynamic provider for Uyuni users."""

from typing import Any, Optional

import pulumi
from pulumi import Input, Output
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)

from ..errors import ValidationError
from ..provider import ProviderConfig, UyuniProvider
from ..resources import UserModel, UserResource

# Attributes whose change is applied in place (as far as Uyuni lets us)
UPDATABLE_ATTRIBUTES = ("password", "firstname", "lastname", "email")


class UserProvider(ResourceProvider):
    """Dynamic provider for Uyuni users.

    Delegates every operation to UserResource. The API client is configured
    on first use from the provider configuration this provider was built
    with, and is dropped when the provider is serialized.
    """

    # The pickled provider carries ProviderConfig, admin password included
    serialize_as_secret_always = True

    def __init__(self, config: ProviderConfig | None = None):
        """
        Initialize the provider.

        Args:
            config: Provider block configuration; unset values fall back to UYUNI_* variables
        """
        super().__init__()
        self.config = config or ProviderConfig()
        self._resource: UserResource | None = None

    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state["_resource"] = None
        return state

    def _user_resource(self) -> UserResource:
        if self._resource is None:
            provider = UyuniProvider()
            provider.configure(self.config)
            self._resource = provider.resources()[0]
        return self._resource

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        """
        Validate planned inputs without contacting the server.

        Args:
            _olds: Previous inputs
            news: New inputs

        Returns:
            CheckResult with any validation failures
        """
        try:
            UserResource().validate(news)
        except ValidationError as e:
            return CheckResult(news, [CheckFailure(e.attribute or "", e.message)])
        return CheckResult(news, [])

    def create(self, props: dict[str, Any]) -> CreateResult:
        """
        Create a user.

        Args:
            props: Resource properties

        Returns:
            CreateResult with the login as ID and the planned values as outputs
        """
        resource = self._user_resource()
        state = resource.create(resource.validate(props))
        return CreateResult(id_=state.login, outs=state.model_dump())

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        """
        Refresh a user from the server.

        Args:
            id_: Resource ID (login)
            props: Current outputs

        Returns:
            ReadResult with first name, last name and email refreshed
        """
        state = self._user_resource().read(UserModel.model_validate(props))
        return ReadResult(id_=id_, outs=state.model_dump())

    def diff(
        self, _id: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> DiffResult:
        """
        Compare old outputs with new inputs.

        A login change forces replacement since the login is the user's key.

        Args:
            _id: Resource ID (login)
            olds: Old outputs
            news: New inputs

        Returns:
            DiffResult indicating if changes are needed
        """
        replaces = []
        if olds.get("login") != news.get("login"):
            replaces.append("login")

        changes = [
            name for name in UPDATABLE_ATTRIBUTES if olds.get(name) != news.get(name)
        ]

        return DiffResult(
            changes=bool(changes or replaces),
            replaces=replaces,
            stables=[],
            delete_before_replace=True,
        )

    def update(
        self, _id: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> UpdateResult:
        """
        Record planned changes; the Uyuni server is not modified.

        Args:
            _id: Resource ID (login)
            olds: Old outputs
            news: New inputs

        Returns:
            UpdateResult with the planned values as outputs
        """
        resource = self._user_resource()
        state = resource.update(
            resource.validate(news), UserModel.model_validate(olds)
        )
        return UpdateResult(outs=state.model_dump())

    def delete(self, _id: str, props: dict[str, Any]) -> None:
        """
        Delete a user.

        Args:
            _id: Resource ID (login)
            props: Current outputs
        """
        self._user_resource().delete(UserModel.model_validate(props))


class User(pulumi.dynamic.Resource):
    """
    A Pulumi dynamic resource for managing Uyuni users.

    Args:
        name: Resource name
        login: User login, changing it replaces the user
        password: Initial password (stored as a secret)
        firstname: First name
        lastname: Last name
        email: E-mail address
        config: Provider configuration (defaults to UYUNI_* variables)
        opts: Standard Pulumi resource options
    """

    login: Output[str]
    password: Output[str]
    firstname: Output[str]
    lastname: Output[str]
    email: Output[str]

    def __init__(
        self,
        name: str,
        login: Input[str],
        password: Input[str],
        firstname: Input[str],
        lastname: Input[str],
        email: Input[str],
        config: ProviderConfig | None = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        opts = pulumi.ResourceOptions.merge(
            opts, pulumi.ResourceOptions(additional_secret_outputs=["password"])
        )
        super().__init__(
            UserProvider(config),
            name,
            {
                "login": login,
                "password": pulumi.Output.secret(password),
                "firstname": firstname,
                "lastname": lastname,
                "email": email,
            },
            opts,
        )
