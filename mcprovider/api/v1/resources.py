"""Transactional warehouse lifecycle endpoints.

Lifecycle failures are reported as diagnostics inside a 200 response; only
provider-level failures use the structured error envelope.
"""

import logging

from fastapi import APIRouter, Depends, Request

from mcprovider.core.deps import get_transactional_warehouse
from mcprovider.models.lifecycle import (
    CreateRequest,
    DeleteRequest,
    ImportStateRequest,
    MetadataResponse,
    ReadRequest,
    ResourceResponse,
    SchemaResponse,
    UpdateRequest,
    UpgradeStateRequest,
    ValidateConfigRequest,
)
from mcprovider.resources.transactional_warehouse import (
    RESOURCE_NAME,
    TransactionalWarehouseResource,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"/{RESOURCE_NAME}")


@router.get("/metadata", response_model=MetadataResponse)
def get_metadata(
    request: Request,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> MetadataResponse:
    return resource.metadata(request.app.state.provider.type_name)


@router.get("/schema", response_model=SchemaResponse)
def get_schema(
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> SchemaResponse:
    """Current schema, attribute flags included."""
    schema = resource.schema()
    return SchemaResponse(
        version=schema.version,
        attributes={
            name: attribute.model_dump(exclude_none=True)
            for name, attribute in schema.attributes.items()
        },
    )


@router.post("/validate", response_model=ResourceResponse)
def validate_config(
    body: ValidateConfigRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.validate_config(body)


@router.post("/create", response_model=ResourceResponse)
def create(
    body: CreateRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.create(body)


@router.post("/read", response_model=ResourceResponse)
def read(
    body: ReadRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.read(body)


@router.post("/update", response_model=ResourceResponse)
def update(
    body: UpdateRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.update(body)


@router.post("/delete", response_model=ResourceResponse)
def delete(
    body: DeleteRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.delete(body)


@router.post("/import", response_model=ResourceResponse)
def import_state(
    body: ImportStateRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.import_state(body)


@router.post("/upgrade", response_model=ResourceResponse)
def upgrade_state(
    body: UpgradeStateRequest,
    resource: TransactionalWarehouseResource = Depends(get_transactional_warehouse),
) -> ResourceResponse:
    return resource.upgrade_state(body)
