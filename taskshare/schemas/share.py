"""Share Schemas — request/response models for the task share endpoints.

Invariants:
    - ShareRequest.role is viewer or editor only (ownership is never granted)
    - user_email is stripped; lookup case-folding happens in the user directory
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from taskshare.core.domain_types import ShareRole
from taskshare.core.repository_protocols import ShareLike


class ShareRequest(BaseModel):
    user_email: str = Field(min_length=3, max_length=320, pattern=r"^\s*[^@\s]+@[^@\s]+\s*$")
    role: ShareRole

    @field_validator("user_email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class SharedUserResponse(BaseModel):
    user_id: UUID
    email: str
    display_name: str | None
    role: ShareRole

    @classmethod
    def from_share(cls, share: ShareLike) -> "SharedUserResponse":
        return cls(
            user_id=share.user_id,
            email=share.user.email,
            display_name=share.user.display_name,
            role=share.role,
        )
