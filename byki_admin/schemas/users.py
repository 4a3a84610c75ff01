"""User, review and FAQ API schemas."""

from pydantic import BaseModel, Field

from byki_admin.domain.entities import User
from byki_admin.domain.enums import UserRole
from byki_admin.schemas.common import DocumentModel


class UserUpdate(DocumentModel):
    """Profile fields an admin may edit."""

    name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    profile_image_url: str | None = None
    role: UserRole | None = None


class ModerationRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class UserPageResponse(BaseModel):
    users: list[User]
    last_doc_id: str | None = Field(
        default=None, description="Pass as start_after to get the next page"
    )


class ReviewHideRequest(BaseModel):
    hide: bool = True


class FAQCreate(DocumentModel):
    is_create = True

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = "General"
    sort_order: int = 0
    is_active: bool = True


class FAQUpdate(DocumentModel):
    question: str | None = Field(default=None, min_length=1)
    answer: str | None = Field(default=None, min_length=1)
    category: str | None = None
    sort_order: int | None = None


class FAQOrderItem(BaseModel):
    id: str
    sort_order: int


class FAQReorderRequest(BaseModel):
    items: list[FAQOrderItem] = Field(..., min_length=1)


class FAQCategoryCreate(DocumentModel):
    is_create = True

    name: str = Field(..., min_length=1)
    sort_order: int = 0
    is_active: bool = True


class FAQCategoryUpdate(DocumentModel):
    name: str | None = Field(default=None, min_length=1)
    sort_order: int | None = None
    is_active: bool | None = None
