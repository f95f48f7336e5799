"""
Pydantic models for API response schemas.

Responsibilities:
- Define standard response structures
- Ensure consistent API output
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    message: str
    metadataUrl: str = Field(..., description="Gateway URL of the pinned metadata document")
    imageUrl: str = Field(..., description="Gateway URL of the pinned image")
    uploadId: str = Field(..., description="Token to pass to /mint for this upload")


class MintResponse(BaseModel):
    message: str
    metadataUrl: str
    imageUrl: str


class NFTResponse(BaseModel):
    message: str
    data: Dict[str, Any]


class NFTListResponse(BaseModel):
    message: str
    data: Optional[List[Dict[str, Any]]] = None
