"""User resource - creates, refreshes and deletes Uyuni users."""

import logging
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..api import CreateUserRequest, UserDetails
from ..errors import (
    RemoteCreateError,
    RemoteDeleteError,
    RemoteReadError,
    UyuniAPIError,
    ValidationError,
)
from ..schema import Attribute, Schema
from .base import ProviderResource

logger = logging.getLogger(__name__)


class UserModel(BaseModel):
    """Managed state of a ``uyuni_user`` resource.

    Attributes:
        login: User login, unique and immutable after creation
        password: Initial password, write-only and never read back
        firstname: First name
        lastname: Last name
        email: E-mail address
    """

    login: str
    password: str = Field(repr=False)
    firstname: str
    lastname: str
    email: str


class UserResource(ProviderResource):
    """Maps the lifecycle of one Uyuni user to the remote API.

    The login is the lookup key for read and delete; there is no separate
    server-side identifier. Update does not touch the remote system.

    Examples:
        >>> resource = UserResource(client)
        >>> state = resource.create(UserModel(
        ...     login="sgiertz",
        ...     password="test123",
        ...     firstname="Simone",
        ...     lastname="Giertz",
        ...     email="sgiertz@foo.bar",
        ... ))
        >>> state = resource.read(state)
    """

    type_suffix = "_user"

    def schema(self) -> Schema:
        return Schema(
            attributes={
                "login": Attribute(required=True),
                "password": Attribute(required=True, sensitive=True),
                "firstname": Attribute(required=True),
                "lastname": Attribute(required=True),
                "email": Attribute(required=True),
            }
        )

    def validate(self, props: dict[str, Any]) -> UserModel:
        """Build the plan model from raw properties.

        Raises:
            ValidationError: If a required attribute is missing or not a string
        """
        for name in self.schema().required_attributes():
            value = props.get(name)
            if value is None:
                raise ValidationError("attribute is required", attribute=name)
            if not isinstance(value, str):
                raise ValidationError(
                    f"expected a string, got {type(value).__name__}", attribute=name
                )
        try:
            return UserModel.model_validate(props)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    def create(self, plan: UserModel) -> UserModel:
        """Create the user and return the plan as the new state.

        No read-back is done, so server-side normalization only shows up on
        the next read.

        Raises:
            RemoteCreateError: If the API call fails
        """
        client = self._require_client()
        request = CreateUserRequest(
            login=plan.login,
            password=plan.password,
            first_name=plan.firstname,
            last_name=plan.lastname,
            email=plan.email,
        )

        logger.info(f"About to create user {plan.login}")
        logger.debug(
            f"{plan.login} - ******** - {plan.firstname} - {plan.lastname} - {plan.email}"
        )

        try:
            client.post("user/create", int, data=request.model_dump(by_alias=True))
        except UyuniAPIError as e:
            raise RemoteCreateError(
                f"Could not create user, unexpected error: {e}",
                cause=e,
                login=plan.login,
            ) from e

        logger.info(f"User {plan.login} created")
        return plan.model_copy()

    def read(self, state: UserModel) -> UserModel:
        """Refresh first name, last name and email from the server.

        Login and password are never refreshed. The given state is not
        modified; a refreshed copy is returned.

        Raises:
            RemoteReadError: If the user cannot be fetched
        """
        details = self.details(state.login)
        return state.model_copy(
            update={
                "firstname": details.first_name,
                "lastname": details.last_name,
                "email": details.email,
            }
        )

    def details(self, login: str) -> UserDetails:
        """Fetch everything the server knows about a user.

        Raises:
            RemoteReadError: If the user cannot be fetched
        """
        client = self._require_client()
        logger.info(f"About to look for user {login}")
        try:
            response = client.get("user/getDetails", UserDetails, params={"login": login})
        except UyuniAPIError as e:
            raise RemoteReadError(
                f"Could not read User {login}: {e}",
                cause=e,
                login=login,
            ) from e

        details = response.result or UserDetails()
        logger.debug(f"Information returned from API: {details!r}")
        return details

    def update(self, plan: UserModel, state: UserModel) -> UserModel:
        """Accept planned changes without applying them remotely."""
        changed = [
            name
            for name in ("firstname", "lastname", "email", "password")
            if getattr(plan, name) != getattr(state, name)
        ]
        if changed:
            logger.warning(
                f"Changes to user {state.login} ({', '.join(changed)}) are not applied to the Uyuni server"
            )
        return plan.model_copy()

    def delete(self, state: UserModel) -> None:
        """Delete the user keyed by login.

        Raises:
            RemoteDeleteError: If the API call fails
        """
        client = self._require_client()
        logger.info(f"About to delete user {state.login}")
        try:
            client.post("user/delete", int, data={}, params={"login": state.login})
        except UyuniAPIError as e:
            raise RemoteDeleteError(
                f"Could not delete user {state.login}, unexpected error: {e}",
                cause=e,
                login=state.login,
            ) from e
        logger.info(f"User {state.login} deleted")
