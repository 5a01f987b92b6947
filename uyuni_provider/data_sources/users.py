"""Users data source - lists every user known to the Uyuni server."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from ..api import UserSummary
from ..errors import RemoteListError, UyuniAPIError
from ..resources.base import ProviderResource
from ..schema import Attribute, Schema

logger = logging.getLogger(__name__)


class UserListing(BaseModel):
    """One entry of the ``uyuni_users`` data source."""

    model_config = ConfigDict(frozen=True)

    id: int
    login: str


class UsersDataSourceModel(BaseModel):
    """Computed state of the ``uyuni_users`` data source."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[UserListing] = Field(default_factory=list, alias="user")


class UsersDataSource(ProviderResource):
    """Read-only listing of Uyuni users.

    All users are fetched in one request; entries keep the order the server
    returned them in. There is no pagination or filtering.
    """

    type_suffix = "_users"

    def schema(self) -> Schema:
        return Schema(
            attributes={
                "user": Attribute(
                    type="list",
                    computed=True,
                    nested={
                        "id": Attribute(type="int64", computed=True),
                        "login": Attribute(required=True),
                    },
                ),
            }
        )

    def read(self) -> UsersDataSourceModel:
        """Fetch all users.

        Raises:
            RemoteListError: If the listing fails; no partial result is returned
        """
        client = self._require_client()
        try:
            response = client.get("user/listUsers", list[UserSummary])
        except UyuniAPIError as e:
            raise RemoteListError(str(e), cause=e) from e

        users = [
            UserListing(id=summary.id, login=summary.login)
            for summary in response.result or []
        ]
        logger.debug(f"Read {len(users)} users from Uyuni")
        return UsersDataSourceModel(users=users)
