"""
Pydantic schemas for recommendations.

A recommendation is a uniquely named link to external media (usually a
video) with an integer popularity score.  Submissions only carry the
name and link; the score always starts at zero.
"""

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, validator

from ..core.errors import ValidationError


def validate_link(value: str) -> str:
    """Return ``value`` unchanged if it is an absolute http(s) URL."""
    parsed = urlparse(value.strip())
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValidationError("link must be a valid http(s) URL")
    return value.strip()


class RecommendationCreate(BaseModel):
    """Schema for submitting a recommendation."""

    name: str = Field(..., example="Falamansa - Xote dos Milagres")
    link: str = Field(..., example="https://www.youtube.com/watch?v=chwyjJbcs1Y")

    @validator("name")
    def check_name(cls, v):
        if not v.strip():
            raise ValidationError("name must not be empty")
        return v

    @validator("link")
    def check_link(cls, v):
        return validate_link(v)


class RecommendationRead(BaseModel):
    """Schema for reading a recommendation."""

    id: int
    name: str
    link: str
    score: int

    model_config = {
        "from_attributes": True,
    }


class PoolStatistics(BaseModel):
    """Aggregate view of the recommendation pool."""

    total: int
    high_band: int = Field(..., description="Recommendations scoring above the high band threshold")
    low_band: int
    top_score: Optional[int] = Field(None, description="Highest score in the pool, null when empty")
