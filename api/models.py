"""
Pydantic models for API request/response validation.
Auto-generates OpenAPI documentation.
"""

from pydantic import BaseModel
from typing import List, Optional

from models import Record


class SubmissionRequest(BaseModel):
    """Body of POST /data. Presence of each field is checked by the handler."""
    id: Optional[str] = None
    origin: Optional[str] = None
    mime_data: Optional[str] = None


class SubmissionResponse(BaseModel):
    """Successful submission response."""
    message: str
    data: Record


class RecordListResponse(BaseModel):
    """JSON rendering of GET /data."""
    count: int
    data: List[Record]


class ErrorResponse(BaseModel):
    """Error response."""
    error: str


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    database_path: str
    record_count: Optional[int] = None
