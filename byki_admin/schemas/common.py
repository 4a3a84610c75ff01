"""Shared API schema helpers."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Request body that is written to Firestore.

    API fields are snake_case; stored fields are the mobile app's camelCase
    names. Create bodies write every non-null field, defaults included;
    update bodies write only the fields the client sent.
    """

    model_config = ConfigDict(use_enum_values=True)

    is_create: ClassVar[bool] = False

    def to_document(self) -> dict[str, Any]:
        if self.is_create:
            data = self.model_dump(exclude_none=True)
        else:
            data = self.model_dump(exclude_unset=True)
        return {to_camel(name): value for name, value in data.items()}


class CreatedResponse(BaseModel):
    """Response for create endpoints."""

    id: str = Field(..., description="Generated document id")


class CountResponse(BaseModel):
    count: int


class ActiveToggle(BaseModel):
    """Request body for enable/disable endpoints."""

    is_active: bool
