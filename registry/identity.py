"""Caller identity resolution."""

import hashlib

from typing import Dict, Optional, Protocol

from fastapi import Header, Request

from common.constants import AUTHORIZATION_SCHEME
from common.types import Identity
from registry.exceptions import InvalidIdentityError


class IdentityProvider(Protocol):
    """Resolves the credential presented with a call into a caller identity."""

    def resolve(self, credential: Optional[str]) -> Identity:
        ...


class StaticIdentityProvider:
    """Always answers with the same identity. Used for in-process callers."""

    def __init__(self, identity: str):
        if not identity:
            raise InvalidIdentityError("Static identity must be a non-empty string")
        self.identity = Identity(identity)

    def resolve(self, credential: Optional[str] = None) -> Identity:
        return self.identity


class BearerIdentityProvider:
    """
    Derives the caller identity from the bearer token.

    The identity is the SHA-256 hex digest of the token, so the owner value
    shown in listings cannot be replayed as a credential.
    """

    def resolve(self, credential: Optional[str]) -> Identity:
        return derive_identity(extract_bearer_token(credential))


def derive_identity(token: str) -> Identity:
    return Identity(hashlib.sha256(token.encode('utf-8')).hexdigest())


class TokenIdentityProvider:
    """Maps bearer tokens to identities through a fixed table."""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = dict(tokens)

    def resolve(self, credential: Optional[str]) -> Identity:
        token = extract_bearer_token(credential)
        identity = self.tokens.get(token)
        if identity is None:
            raise InvalidIdentityError("Unknown credential")
        return Identity(identity)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header value.

    Args:
        authorization: Header value (format: "Bearer <token>")

    Returns:
        The token

    Raises:
        InvalidIdentityError: If the header is missing, malformed or empty
    """
    if not authorization:
        raise InvalidIdentityError("Missing authorization header")

    prefix = f"{AUTHORIZATION_SCHEME} "
    if not authorization.startswith(prefix):
        raise InvalidIdentityError("Invalid authorization header format")

    token = authorization[len(prefix):].strip()
    if not token:
        raise InvalidIdentityError("Empty bearer token")
    return token


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Identity:
    """
    FastAPI dependency resolving the caller identity with the app's provider.

    Raises:
        InvalidIdentityError: If the credential cannot be resolved
    """
    provider: IdentityProvider = request.app.state.identity_provider
    identity = provider.resolve(authorization)
    request.state.identity = identity
    return identity
