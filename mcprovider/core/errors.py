"""Error handling and structured error responses."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mcprovider.core.config import settings
from mcprovider.core.metrics import metrics

logger = logging.getLogger(__name__)


class ErrorCode:
    """Stable error codes for provider failures."""

    # Provider configuration
    PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"
    PROVIDER_CONFIGURE_TYPE = "PROVIDER_CONFIGURE_TYPE"

    # Monte Carlo API
    MC_TRANSPORT_ERROR = "MC_TRANSPORT_ERROR"
    MC_RESPONSE_INVALID = "MC_RESPONSE_INVALID"
    MC_GRAPHQL_ERROR = "MC_GRAPHQL_ERROR"

    # Resource state
    STATE_DECODE_ERROR = "STATE_DECODE_ERROR"
    STATE_VALIDATION_ERROR = "STATE_VALIDATION_ERROR"

    # System
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorCategory:
    """Error categories for classification."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"
    UPSTREAM = "upstream"


class APIError(BaseModel):
    """Structured error response model."""

    code: str
    category: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: str
    timestamp: str
    retryable: bool = False


class APIException(Exception):
    """Base exception for provider errors."""

    def __init__(
        self,
        code: str,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        retryable: bool = False,
    ):
        self.code = code
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        self.retryable = retryable
        super().__init__(message)


class MonteCarloClientError(APIException):
    """Raised when a Monte Carlo API call fails before a GraphQL payload is obtained."""

    def __init__(self, operation: str, message: str, code: str = ErrorCode.MC_TRANSPORT_ERROR):
        self.operation = operation
        super().__init__(
            code=code,
            message=message,
            category=ErrorCategory.UPSTREAM,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"operation": operation},
        )


class GraphQLResponseError(APIException):
    """Raised when the Monte Carlo API answers with GraphQL errors."""

    def __init__(self, operation: str, errors: List[Dict[str, Any]]):
        self.operation = operation
        self.errors = errors
        super().__init__(
            code=ErrorCode.MC_GRAPHQL_ERROR,
            message=format_graphql_errors(errors),
            category=ErrorCategory.UPSTREAM,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"operation": operation, "errors": errors},
        )


def format_graphql_errors(errors: List[Dict[str, Any]]) -> str:
    """Join GraphQL error messages into a single line."""
    messages = []
    for error in errors:
        message = error.get("message") if isinstance(error, dict) else None
        messages.append(message or str(error))
    return "; ".join(messages) or "unknown GraphQL error"


def create_error_response(
    request: Request,
    code: str,
    message: str,
    category: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
    retryable: bool = False,
) -> JSONResponse:
    """Create a structured error response."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    error = APIError(
        code=code,
        category=category,
        message=message,
        details=details,
        request_id=request_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
        retryable=retryable,
    )

    logger.error(
        f"API Error: {code} - {message}",
        extra={
            "error_code": code,
            "error_category": category,
            "request_id": request_id,
            "status_code": status_code,
        },
    )

    metrics.record_error(code, category)

    return JSONResponse(
        status_code=status_code,
        content={"error": error.model_dump()},
    )


async def error_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handle APIException instances."""
    return create_error_response(
        request=request,
        code=exc.code,
        message=exc.message,
        category=exc.category,
        status_code=exc.status_code,
        details=exc.details,
        retryable=exc.retryable,
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception", exc_info=exc)
    message = "An internal error occurred"
    details: Optional[Dict[str, Any]] = None
    if settings.environment == "development":
        message = str(exc) or message
        details = {"exception_type": type(exc).__name__, "detail": str(exc)}
    return create_error_response(
        request=request,
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        category=ErrorCategory.INTERNAL,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        retryable=False,
        details=details,
    )


def setup_error_handlers(app: FastAPI) -> None:
    """Register error handlers with FastAPI app."""
    app.add_exception_handler(APIException, error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
