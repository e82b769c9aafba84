"""
Response schemas (Pydantic)

Envelopes shared by the accounting API
"""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(default="ok", description="Service status")
    mode: str = Field(..., description="Runtime mode (production/development)")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Response time (UTC)")


class ErrorResponse(BaseModel):
    """Error response envelope"""

    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")
