"""Structured record for recoverable source errors."""

from pydantic import BaseModel, ConfigDict, Field

from melt.models.enums import SourceErrorKind


class SourceError(BaseModel):
    """A problem with one configuration source.

    Collected during resolution and returned to the caller; never raised.
    """

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Human-readable description")
    kind: SourceErrorKind = Field(description="Which source or check failed")
    path: str | None = Field(default=None, description="File path involved, if any")
    key: str | None = Field(default=None, description="Option key involved, if any")

    def __str__(self) -> str:
        if self.path:
            return f"[{self.kind.value}] {self.message} ({self.path})"
        return f"[{self.kind.value}] {self.message}"
