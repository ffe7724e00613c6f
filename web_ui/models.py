"""
Bookmark Checker v1 - Session API Pydantic Models

Models for API requests/responses around the bookmark session.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from bookmarks.models import Bookmark, CheckResult

StatusFilter = Literal["all", "pending", "checking", "valid", "invalid"]


class BookmarkDisplay(BaseModel):
    """Bookmark data as returned to clients"""
    id: str
    name: str
    url: str
    description: Optional[str] = None
    category: Optional[str] = None
    status: str
    status_code: Optional[int] = Field(None, alias="statusCode")
    error_message: Optional[str] = Field(None, alias="errorMessage")
    response_time_ms: Optional[int] = Field(None, alias="responseTimeMs")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkDisplay":
        return cls(
            id=bookmark.id,
            name=bookmark.name,
            url=bookmark.url,
            description=bookmark.description,
            category=bookmark.category,
            status=bookmark.status.value,
            status_code=bookmark.status_code,
            error_message=bookmark.error_message,
            response_time_ms=bookmark.response_time_ms,
        )


class StatsResponse(BaseModel):
    """Aggregate counts over the loaded bookmarks"""
    total: int
    valid: int
    invalid: int
    pending: int
    checking: int
    is_checking: bool = Field(False, alias="isChecking")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: CheckResult, is_checking: bool = False) -> "StatsResponse":
        return cls(**result.to_dict(), is_checking=is_checking)


class BookmarkListResponse(BaseModel):
    """Response for bookmark list queries"""
    bookmarks: list[BookmarkDisplay]
    total: int


class UploadResponse(BaseModel):
    """Response after a bookmark file was loaded"""
    filename: str
    file_type: str = Field(..., alias="fileType")
    loaded: int
    stats: StatsResponse

    model_config = ConfigDict(populate_by_name=True)


class CheckStartedResponse(BaseModel):
    """Response when a check run was scheduled"""
    status: str = "started"
    total: int
    batch_size: int = Field(..., alias="batchSize")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    checker: str
