"""Diagnostics collected while configuring the provider.

Configuration reports every independent problem at once instead of stopping at
the first one, so errors are gathered here and raised together.
"""

from typing import Literal

from pydantic import BaseModel

from .errors import ConfigurationError


class Diagnostic(BaseModel):
    """A single user-facing problem report.

    Attributes:
        severity: "error" or "warning"
        summary: Short title
        detail: Longer explanation with remediation hints
        attribute: Configuration attribute the problem belongs to, if any
    """

    severity: Literal["error", "warning"] = "error"
    summary: str
    detail: str = ""
    attribute: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.attribute}] " if self.attribute else ""
        return f"{prefix}{self.summary}: {self.detail}" if self.detail else f"{prefix}{self.summary}"


class Diagnostics:
    """Ordered collection of diagnostics."""

    def __init__(self):
        self._items: list[Diagnostic] = []

    def add_attribute_error(self, attribute: str, summary: str, detail: str = "") -> None:
        self._items.append(
            Diagnostic(summary=summary, detail=detail, attribute=attribute)
        )

    def has_error(self) -> bool:
        return any(d.severity == "error" for d in self._items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == "error"]

    def raise_for_errors(self) -> None:
        """Raise ConfigurationError carrying all errors, if there are any."""
        if self.has_error():
            raise ConfigurationError(self.errors())
