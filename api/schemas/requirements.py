"""Job requirement request and response schemas."""

from typing import Optional
from pydantic import BaseModel, Field

from database.models.jobs import JobRequirement


class RequirementCreate(BaseModel):
    """Schema for requesting a new position."""

    # Presence and ranges are checked by the service so they surface as 400s
    title: Optional[str] = Field(None, max_length=255, description="Position title")
    department: Optional[str] = Field(None, max_length=100, description="Owning department")
    budget: Optional[float] = Field(None, description="Approved budget")
    description: Optional[str] = Field(None, description="Role description")
    positions: int = Field(default=1, description="Number of openings")


class RequirementReject(BaseModel):
    """Schema for rejecting a requirement."""

    reason: Optional[str] = Field(None, description="Why the request was turned down")


class RequirementResponse(BaseModel):
    message: Optional[str] = None
    requirement: JobRequirement


class RequirementListResponse(BaseModel):
    total: int = Field(ge=0, description="Matches before the limit is applied")
    requirements: list[JobRequirement]
