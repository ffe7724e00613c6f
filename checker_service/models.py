"""
Bookmark Checker v1 - Check-URL Service Pydantic Models

API request/response models for the check-url service.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class CheckUrlRequest(BaseModel):
    """Request model for /check-url endpoint"""
    url: Optional[str] = Field(None, description="URL to probe")


class CheckUrlResponse(BaseModel):
    """Result of a single reachability probe"""
    url: str = Field(..., description="URL that was checked")
    status: Literal["valid", "invalid"] = Field(..., description="Probe outcome")
    status_code: Optional[int] = Field(
        None, alias="statusCode", description="Final HTTP status code, if a response arrived"
    )
    error_message: Optional[str] = Field(
        None, alias="errorMessage", description="Why the URL is considered invalid"
    )
    response_time_ms: int = Field(
        ..., alias="responseTimeMs", description="Wall-clock duration of the probe"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "url": "https://example.com/missing",
                "status": "invalid",
                "statusCode": 404,
                "errorMessage": "HTTP 404 Not Found",
                "responseTimeMs": 182,
            }
        },
    )


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    url: Optional[str] = Field(None, description="URL that caused the error")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    timeout: float = Field(..., description="Per-probe timeout in seconds")
