"""Shared FastAPI dependency functions."""

from fastapi import Request

from mcprovider.core.errors import APIException, ErrorCode, ErrorCategory
from mcprovider.resources.transactional_warehouse import (
    RESOURCE_NAME,
    TransactionalWarehouseResource,
)


def get_transactional_warehouse(request: Request) -> TransactionalWarehouseResource:
    """Return the transactional warehouse resource of the app's provider.

    Raises a 503 :class:`APIException` when the provider has not been configured.
    """
    provider = getattr(request.app.state, "provider", None)
    if provider is None or provider.client is None:
        raise APIException(
            code=ErrorCode.PROVIDER_NOT_CONFIGURED,
            message="Provider has not been configured",
            category=ErrorCategory.UPSTREAM,
            status_code=503,
        )
    return provider.resources()[f"{provider.type_name}_{RESOURCE_NAME}"]
