"""
Shared schema primitives used across the API.
"""
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    error: str = Field(examples=["fact not found"])
