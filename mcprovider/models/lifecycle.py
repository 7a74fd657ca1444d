"""Request and response models for resource lifecycle operations."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from mcprovider.core.diagnostics import Diagnostic, Severity

RawState = Dict[str, Any]


class CreateRequest(BaseModel):
    plan: RawState


class ReadRequest(BaseModel):
    state: RawState


class UpdateRequest(BaseModel):
    plan: RawState
    state: RawState


class DeleteRequest(BaseModel):
    state: RawState


class ImportStateRequest(BaseModel):
    id: str


class UpgradeStateRequest(BaseModel):
    version: int = Field(..., ge=0, description="Schema version the prior state was written with")
    state: RawState


class ValidateConfigRequest(BaseModel):
    config: RawState


class ResourceResponse(BaseModel):
    """
    Outcome of a lifecycle operation.

    ``state`` is the state to persist. ``None`` means nothing is stored:
    the resource was never created, was removed from state, or was deleted.
    """

    state: Optional[RawState] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


class MetadataResponse(BaseModel):
    type_name: str


class SchemaResponse(BaseModel):
    version: int
    attributes: Dict[str, Any]
