"""Review and FAQ entities."""

from dataclasses import dataclass, field
from datetime import datetime

from byki_admin.domain.enums import ReviewTargetType


@dataclass(frozen=True)
class Review:
    """Normalized review of a workshop or a product.

    Only reviews that are approved and not hidden count toward the target's
    stored aggregate rating.
    """

    id: str
    created_at: datetime
    updated_at: datetime
    user_id: str = ""
    user_name: str = "Anonymous"
    user_photo_url: str | None = None
    target_id: str = ""
    target_type: ReviewTargetType = ReviewTargetType.PRODUCT
    rating: float = 0
    comment: str | None = None
    image_urls: list[str] = field(default_factory=list)
    is_approved: bool = True
    is_hidden: bool = False

    @property
    def is_visible(self) -> bool:
        return self.is_approved and not self.is_hidden


@dataclass(frozen=True)
class FAQ:
    id: str
    created_at: datetime
    updated_at: datetime
    question: str = ""
    answer: str = ""
    category: str = "General"
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class FAQCategory:
    id: str
    name: str = ""
    sort_order: int = 0
    is_active: bool = True
