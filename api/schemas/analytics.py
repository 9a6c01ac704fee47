"""Dashboard analytics schemas."""

from typing import Union
from pydantic import BaseModel, Field

from database.models.candidates import Candidate


class RecruitmentStats(BaseModel):
    """Per-status counts for each collection."""

    requirements: dict[str, int]
    postings: dict[str, int]
    candidates: dict[str, int]
    conversion_rate: Union[int, str] = Field(
        description='0 with no candidates, otherwise a two-decimal percentage string such as "50.00"'
    )


class TopCandidatesResponse(BaseModel):
    total: int
    candidates: list[Candidate]
