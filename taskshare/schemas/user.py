"""User Schemas — profile of the authenticated requester."""

from uuid import UUID

from pydantic import BaseModel


class MeResponse(BaseModel):
    id: UUID
    email: str
    display_name: str | None
