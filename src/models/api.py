"""API response models."""

from pydantic import BaseModel, Field

from src.models.restaurant import Restaurant


class SearchResponse(BaseModel):
    """Paginated restaurant search response."""

    restaurants: list[Restaurant] = Field(default_factory=list)
    pages: int = 0
    total_count: int = 0


class ErrorResponse(BaseModel):
    """Generic client-facing error body."""

    detail: str
