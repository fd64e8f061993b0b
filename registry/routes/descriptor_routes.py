"""Descriptor API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from common.types import Descriptor, Identity, RegistryKey
from registry.file_registry import FileRegistry
from registry.hashing import key_to_hex, parse_key
from registry.identity import get_current_identity
from registry.schemas.common import ErrorResponse
from registry.schemas.descriptors import (
    DeleteDescriptorResponse,
    DescriptorResponse,
    FindKeyResponse,
    InsertDescriptorRequest,
    ListDescriptorsResponse,
    ValueTransferRequest,
)

router = APIRouter(
    prefix="/descriptors",
    tags=["Descriptors"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


def get_registry(request: Request) -> FileRegistry:
    return request.app.state.registry


def _to_response(key: RegistryKey, descriptor: Descriptor) -> DescriptorResponse:
    return DescriptorResponse(
        key=key_to_hex(key),
        name=descriptor.name,
        file_type=descriptor.file_type,
        size=descriptor.size,
        owner=descriptor.owner,
    )


@router.post("", response_model=DescriptorResponse, status_code=status.HTTP_201_CREATED)
async def insert_descriptor(
    body: InsertDescriptorRequest,
    registry: FileRegistry = Depends(get_registry),
    identity: Identity = Depends(get_current_identity)
):
    """
    Register a descriptor owned by the calling identity.

    Raises:
        - 400: Non-positive size
        - 401: Missing or unknown credential
        - 409: Same (name, file_type, size, owner) already registered
    """
    key = registry.insert(body.name, body.file_type, body.size, identity)
    return _to_response(key, registry.get(key))


@router.get("", response_model=ListDescriptorsResponse)
async def list_descriptors(registry: FileRegistry = Depends(get_registry)):
    """
    Enumerate every descriptor. Order is not stable across deletions.
    """
    descriptors = [_to_response(key, descriptor) for key, descriptor in registry.items()]
    return ListDescriptorsResponse(descriptors=descriptors, count=len(descriptors))


@router.get("/lookup", response_model=FindKeyResponse)
async def find_descriptor_key(
    name: str = Query(..., description="Exact, case-sensitive descriptor name"),
    registry: FileRegistry = Depends(get_registry)
):
    """
    Return the key of the first descriptor with the given name.

    Raises:
        - 404: No descriptor has that name
    """
    return FindKeyResponse(key=key_to_hex(registry.find_key_by_name(name)))


@router.post("/transfers", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def transfer_value(
    body: Optional[ValueTransferRequest] = None,
    registry: FileRegistry = Depends(get_registry)
):
    """
    Value transfers are never accepted; always answers 405.
    """
    registry.reject_value_transfer(amount=body.amount if body else None)


@router.get("/{key}", response_model=DescriptorResponse)
async def get_descriptor(key: str, registry: FileRegistry = Depends(get_registry)):
    """
    Raises:
        - 400: Malformed key
        - 404: Descriptor not found
    """
    registry_key = parse_key(key)
    return _to_response(registry_key, registry.get(registry_key))


@router.delete("/{key}", response_model=DeleteDescriptorResponse)
async def delete_descriptor(
    key: str,
    registry: FileRegistry = Depends(get_registry),
    identity: Identity = Depends(get_current_identity)
):
    """
    Delete a descriptor. Only its owner may do so.

    Raises:
        - 400: Malformed key
        - 401: Missing or unknown credential
        - 403: Caller does not own the descriptor
        - 404: Descriptor not found
    """
    registry_key = parse_key(key)
    registry.delete(registry_key, identity)
    return DeleteDescriptorResponse(key=key_to_hex(registry_key), deleted=True)
