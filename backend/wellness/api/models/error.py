from typing import Any, Dict, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: str
    details: Optional[Dict[str, Any]] = None


class RelayErrorResponse(BaseModel):
    """Error body returned by the chat relay."""

    error: str
