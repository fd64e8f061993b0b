"""Pydantic schemas for API requests and responses."""

from registry.schemas.descriptors import (
    InsertDescriptorRequest,
    DescriptorResponse,
    ListDescriptorsResponse,
    FindKeyResponse,
    DeleteDescriptorResponse,
    ValueTransferRequest
)
from registry.schemas.common import ErrorResponse

__all__ = [
    "InsertDescriptorRequest",
    "DescriptorResponse",
    "ListDescriptorsResponse",
    "FindKeyResponse",
    "DeleteDescriptorResponse",
    "ValueTransferRequest",
    "ErrorResponse"
]
