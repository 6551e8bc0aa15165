"""
Shared context access and write authorization for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..logging import get_logger
from .context import OperationContext

if TYPE_CHECKING:
    from ..store.base import Stores
    from .loaders import Loaders

logger = get_logger(__name__)


def get_operation_context(info: strawberry.Info) -> OperationContext:
    """
    Extract the operation context from a GraphQL info object.

    Raises:
        RuntimeError: If the operation was executed without an OperationContext
    """
    context = info.context
    if not isinstance(context, OperationContext):
        raise RuntimeError(
            f"Expected OperationContext in GraphQL info, got {type(context).__name__}"
        )
    return context


def get_stores(info: strawberry.Info) -> "Stores":
    """Get the stores bound to the current operation."""
    stores = get_operation_context(info).stores
    if stores is None:
        raise RuntimeError("No stores bound to the operation context")
    return stores


def can_write(context: OperationContext | None) -> bool:
    """
    Check whether the caller of an operation may perform writes.

    Any identity-bearing context passes the default check; the context's
    authorizer decides.
    """
    if context is None:
        return False

    allowed = context.can_write()
    if not allowed:
        logger.info("Write not authorized", authenticated=context.is_authenticated)
    return allowed


def get_loaders(info: strawberry.Info) -> "Loaders":
    """Get the operation's batching loaders, creating them on first use."""
    from .loaders import Loaders

    context = get_operation_context(info)
    if context.loaders is None:
        context.loaders = Loaders(get_stores(info))
    return context.loaders
