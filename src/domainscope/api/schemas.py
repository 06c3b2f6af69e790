"""API schemas for request/response models."""
from pydantic import BaseModel, Field
from typing import List, Optional

MAX_ADDITIONAL_PARTS = 127
MAX_BATCH_HOSTS = 1000


class PublicSuffixResponse(BaseModel):
    """Response model for a public suffix lookup."""
    host: str
    public_suffix: Optional[str]
    matched: bool


class BaseDomainResponse(BaseModel):
    """Response model for a base domain lookup."""
    host: str
    additional_parts: int
    public_suffix: Optional[str]
    base_domain: Optional[str]
    matched: bool


class LookupRequest(BaseModel):
    """Request model for batch lookups."""
    hosts: List[str] = Field(..., min_length=1, max_length=MAX_BATCH_HOSTS, description="Hostnames to look up")
    additional_parts: int = Field(1, ge=0, le=MAX_ADDITIONAL_PARTS, description="Labels to add to the public suffix")


class LookupResponse(BaseModel):
    """Response model for batch lookups."""
    results: List[BaseDomainResponse]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    rules: int


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str
    detail: Optional[str] = None
