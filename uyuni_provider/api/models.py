"""Wire-format models for the Uyuni HTTP API."""

from typing import Any, Generic, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

T = TypeVar("T")


def _default_if_null(model: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    # The API sends null for unset server-side fields
    if value is None:
        return model.model_fields[info.field_name].get_default()
    return value


class ConnectionDetails(BaseModel):
    """Connection parameters for a Uyuni server.

    Attributes:
        server: Host name of the Uyuni server (no scheme)
        user: API user login
        password: API user password
        cacert: Path to a CA certificate to verify the server with
        insecure: Skip TLS verification
    """

    model_config = ConfigDict(frozen=True)

    server: str
    user: str
    password: str = Field(repr=False)
    cacert: str = ""
    insecure: bool = False

    @property
    def base_url(self) -> str:
        return f"https://{self.server}/rhn/manager/api"


class APIResponse(BaseModel, Generic[T]):
    """Envelope every Uyuni API call answers with."""

    success: bool = False
    message: str = ""
    result: T | None = None


class UserDetails(BaseModel):
    """Result of ``user/getDetails``."""

    model_config = ConfigDict(extra="ignore")

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    org_id: int = 0
    org_name: str = ""
    prefix: str = ""
    last_login_date: str = ""
    created_date: str = ""
    enabled: bool = False
    use_pam: bool = False
    read_only: bool = False
    errata_notification: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, value, info)


class UserSummary(BaseModel):
    """One entry of ``user/listUsers``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    login: str
    login_uc: str = Field(
        default="", validation_alias=AliasChoices("login_uc", "login_UC")
    )
    enabled: bool = False

    @field_validator("login_uc", "enabled", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, value, info)


class CreateUserRequest(BaseModel):
    """Body of ``user/create``."""

    model_config = ConfigDict(populate_by_name=True)

    login: str
    password: str = Field(repr=False)
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
