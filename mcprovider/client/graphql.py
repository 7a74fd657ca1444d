"""Monte Carlo GraphQL API client."""

import logging
import time
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from mcprovider.core.config import settings
from mcprovider.core.errors import (
    ErrorCode,
    GraphQLResponseError,
    MonteCarloClientError,
)
from mcprovider.core.metrics import metrics

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class GraphQLResult(BaseModel):
    """Raw GraphQL payload: ``data`` may be partial when ``errors`` is set."""

    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[Dict[str, Any]]] = None


class MonteCarloClient:
    """Issues fixed GraphQL documents against the Monte Carlo API."""

    def __init__(
        self,
        api_url: str,
        api_key_id: str,
        api_key_token: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self._http = httpx.Client(
            headers={
                "x-mcd-id": api_key_id,
                "x-mcd-token": api_key_token,
                "Content-Type": "application/json",
            },
            timeout=timeout if timeout is not None else settings.mc_api_timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls) -> "MonteCarloClient":
        """Build a client from environment settings."""
        return cls(
            api_url=settings.mc_api_url,
            api_key_id=settings.mc_api_key_id,
            api_key_token=settings.mc_api_key_token,
            timeout=settings.mc_api_timeout,
        )

    def close(self) -> None:
        self._http.close()

    def exec_raw(
        self, operation: str, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> GraphQLResult:
        """
        Execute a GraphQL document and return the raw payload.

        GraphQL errors do not raise here; callers decide how to treat partial data.

        Raises:
            MonteCarloClientError: On HTTP failure or a body that is not a GraphQL payload
        """
        start_time = time.time()
        status = "error"
        try:
            try:
                response = self._http.post(
                    self.api_url, json={"query": query, "variables": variables or {}}
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(
                    f"Monte Carlo '{operation}' request failed: {e}",
                    extra={"operation": operation},
                )
                raise MonteCarloClientError(operation, str(e)) from e

            try:
                result = GraphQLResult.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise MonteCarloClientError(
                    operation,
                    f"response is not a GraphQL payload: {e}",
                    code=ErrorCode.MC_RESPONSE_INVALID,
                ) from e

            status = "partial" if result.errors else "success"
            return result
        finally:
            metrics.record_graphql_operation(operation, status, time.time() - start_time)

    def query(
        self,
        operation: str,
        query: str,
        result_type: Type[T],
        variables: Optional[Dict[str, Any]] = None,
    ) -> T:
        """Execute a document and decode ``data`` into ``result_type``."""
        result = self.exec_raw(operation, query, variables)
        if result.errors:
            raise GraphQLResponseError(operation, result.errors)
        return decode(operation, result.data, result_type)

    def mutate(
        self,
        operation: str,
        mutation: str,
        result_type: Type[T],
        variables: Optional[Dict[str, Any]] = None,
    ) -> T:
        """Execute a mutation; any GraphQL error fails the whole call."""
        logger.debug(f"Monte Carlo mutation '{operation}'", extra={"operation": operation})
        return self.query(operation, mutation, result_type, variables)


def decode(operation: str, data: Optional[Dict[str, Any]], result_type: Type[T]) -> T:
    """Validate a GraphQL ``data`` object against its expected shape."""
    try:
        return result_type.model_validate(data or {})
    except ValidationError as e:
        raise MonteCarloClientError(
            operation,
            f"failed to decode response data - {e}",
            code=ErrorCode.MC_RESPONSE_INVALID,
        ) from e
