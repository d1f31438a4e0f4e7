"""
Common schemas for API responses.
"""
from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str
    details: Optional[Any] = None
