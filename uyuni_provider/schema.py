"""Declarative attribute schemas for the provider, its resource and data source."""

from typing import Literal

from pydantic import BaseModel, Field


class Attribute(BaseModel):
    """Description of one configurable or computed attribute.

    Attributes:
        type: Value type ("string", "int64" or "list")
        required: Must be set in configuration
        optional: May be set in configuration
        computed: Filled in by the provider
        sensitive: Value must be hidden in output and state
        nested: Attributes of each element for nested list attributes
    """

    type: Literal["string", "int64", "list"] = "string"
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    nested: dict[str, "Attribute"] | None = None


class Schema(BaseModel):
    """Named set of attributes."""

    attributes: dict[str, Attribute] = Field(default_factory=dict)

    def required_attributes(self) -> list[str]:
        return [name for name, attr in self.attributes.items() if attr.required]

    def sensitive_attributes(self) -> list[str]:
        return [name for name, attr in self.attributes.items() if attr.sensitive]


Attribute.model_rebuild()
