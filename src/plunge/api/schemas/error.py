"""
Error schemas - Pydantic models for error responses

Every error leaves the API in the same flat envelope:

    {"error": "temp must be a number between 40 and 104"}
    {"error": "Failed to set temperature", "message": "Could not find gateway 'Pentair: 00-00-00'"}
"""

from pydantic import BaseModel, Field
from typing import Optional


class ErrorResponse(BaseModel):
    """API error response - standardized format"""
    error: str = Field(description="What failed, or which constraint was violated")
    message: Optional[str] = Field(None, description="Underlying failure text for diagnostics")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Failed to set circuit state",
                "message": "Connection timeout after 15.0s"
            }
        }
    }
