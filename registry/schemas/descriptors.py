"""Pydantic schemas for descriptor endpoints."""

from typing import List
from pydantic import BaseModel


class InsertDescriptorRequest(BaseModel):
    """Request model for registering a descriptor."""
    name: str
    file_type: str
    size: int


class DescriptorResponse(BaseModel):
    """Response model for a single descriptor."""
    key: str
    name: str
    file_type: str
    size: int
    owner: str


class ListDescriptorsResponse(BaseModel):
    """Response model for descriptor enumeration."""
    descriptors: List[DescriptorResponse]
    count: int


class FindKeyResponse(BaseModel):
    """Response model for lookup by name."""
    key: str


class DeleteDescriptorResponse(BaseModel):
    """Response model for descriptor deletion."""
    key: str
    deleted: bool


class ValueTransferRequest(BaseModel):
    """Request model for value transfer attempts (always rejected)."""
    amount: int = 0
