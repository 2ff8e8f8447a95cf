"""Data models for swiftgate (Swift syntax gate hook)."""

import json
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ToolInput(BaseModel):
    """The `tool_input` block of a PostToolUse payload."""

    model_config = ConfigDict(extra="ignore")

    file_path: str | None = Field(None, description="File the tool just edited or wrote")


class ChangeEvent(BaseModel):
    """One file-mutation notification delivered on the hook's stdin."""

    model_config = ConfigDict(extra="ignore")

    tool_name: str | None = None
    tool_input: ToolInput = Field(default_factory=ToolInput)

    @property
    def file_path(self) -> str:
        """Path of the mutated file, or an empty string when absent."""
        return self.tool_input.file_path or ""

    @classmethod
    def from_payload(cls, raw: str) -> "ChangeEvent":
        """Parse a raw stdin payload.

        Never raises: invalid JSON, a non-object document, or a wrongly typed
        field all produce an empty event with no file path.
        """
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError, TypeError):
            return cls()

        if not isinstance(data, dict):
            return cls()

        try:
            return cls.model_validate(data)
        except ValidationError:
            return cls()


class CheckResult(BaseModel):
    """Outcome of one syntax-checker run."""

    ok: bool
    diagnostics: str = ""


AllowReason = Literal[
    "out_of_scope",  # Extension does not match
    "file_missing",  # Nothing on disk to check
    "passed",        # Checker accepted the file
]


class Allow(BaseModel):
    """Let the orchestrator continue silently."""

    kind: Literal["allow"] = "allow"
    reason: AllowReason


class Block(BaseModel):
    """Stop the orchestrator and surface the checker diagnostics."""

    kind: Literal["block"] = "block"
    path: str
    diagnostics: str

    def to_message(self) -> str:
        """Format the marker line followed by the raw checker output."""
        return f"Swift syntax error in {self.path}:\n{self.diagnostics.rstrip()}"


class Unavailable(BaseModel):
    """The checker itself could not be run."""

    kind: Literal["unavailable"] = "unavailable"
    path: str
    detail: str

    def to_message(self) -> str:
        return f"Swift syntax check unavailable for {self.path}: {self.detail}"


Verdict = Annotated[Allow | Block | Unavailable, Field(discriminator="kind")]
