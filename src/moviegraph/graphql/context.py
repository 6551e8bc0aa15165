"""GraphQL context for operation-scoped state.

The context is created fresh for each operation and provides:
- Stores (shared per process, passed in explicitly)
- Caller identity (optional; absent means unauthenticated)
- Request ID (for log correlation)
- Authorizer (capability check used by mutations)
- Loaders (batching, cached for the operation only)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from strawberry.fastapi import BaseContext

from ..logging import get_logger, get_request_id, set_request_context

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response

    from ..store.base import Stores
    from .loaders import Loaders

logger = get_logger(__name__)

Authorizer = Callable[["OperationContext"], bool]

# Authorization schemes that are never taken as a bare token
AUTH_SCHEMES = frozenset({"bearer", "basic", "digest", "negotiate", "token"})


def any_identity(context: OperationContext) -> bool:
    """Allow any caller that carries a non-empty identity."""
    return bool(context.caller_id and context.caller_id.strip())


@dataclass
class OperationContext(BaseContext):
    """Operation context handed to every resolver of one operation."""

    stores: Stores = field(default=None)  # type: ignore[assignment]
    caller_id: str | None = None
    request_id: str | None = None
    authorizer: Authorizer = any_identity
    loaders: Loaders | None = None

    # Standard Strawberry/FastAPI context fields
    request: Request | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if the operation carries a caller identity."""
        return bool(self.caller_id)

    def can_write(self) -> bool:
        """Check whether the caller may perform writes."""
        return self.authorizer(self)


def extract_caller_identity(headers: Mapping[str, str] | None) -> str | None:
    """
    Extract the caller identity from request headers.

    ``Authorization: Bearer <token>`` (or a bare token) yields the token;
    ``X-User-Id`` is used when no authorization header is present.
    Blank values mean unauthenticated.
    """
    if not headers:
        return None

    normalized = {key.lower(): value for key, value in headers.items()}

    authorization = (normalized.get("authorization") or "").strip()
    if authorization:
        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() == "bearer":
            return token or None
        if not token:
            # A lone scheme name is an empty credential, not a bare token
            return None if scheme.lower() in AUTH_SCHEMES else scheme
        logger.debug("Unsupported authorization scheme", scheme=scheme)
        return None

    user_id = (normalized.get("x-user-id") or "").strip()
    return user_id or None


def build_context(
    stores: Stores,
    request: Request | None = None,
    response: Response | None = None,
    *,
    headers: Mapping[str, str] | None = None,
    caller_id: str | None = None,
    authorizer: Authorizer = any_identity,
) -> OperationContext:
    """Build a fresh context for one operation.

    Args:
        stores: Process-wide stores
        request: Inbound HTTP request, if any
        response: Outbound HTTP response, if any
        headers: Headers to read the identity from (defaults to the request's)
        caller_id: Already-resolved identity; takes precedence over headers
        authorizer: Capability check applied to writes

    Returns:
        OperationContext for exactly one operation
    """
    if headers is None and request is not None:
        headers = request.headers

    if caller_id is None:
        caller_id = extract_caller_identity(headers)

    request_id = None
    if headers:
        normalized: dict[str, Any] = {key.lower(): value for key, value in headers.items()}
        request_id = normalized.get("x-request-id")
    request_id = set_request_context(request_id=request_id or get_request_id(), user_id=caller_id)

    logger.debug("Operation context built", authenticated=caller_id is not None)

    from .loaders import Loaders

    return OperationContext(
        stores=stores,
        caller_id=caller_id,
        request_id=request_id,
        authorizer=authorizer,
        loaders=Loaders(stores),
        request=request,
        response=response,
    )
