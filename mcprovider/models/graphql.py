"""Response shapes of the Monte Carlo GraphQL operations."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GraphQLModel(BaseModel):
    """Base for payloads returned in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# getWarehouse

class WarehouseConnection(GraphQLModel):
    uuid: str
    type: str
    created_on: str = ""
    updated_on: Optional[str] = None


class DataCollectorRef(GraphQLModel):
    uuid: str


class Warehouse(GraphQLModel):
    uuid: Optional[str] = None
    name: str
    connections: List[WarehouseConnection] = Field(default_factory=list)
    data_collector: DataCollectorRef


class GetWarehouse(GraphQLModel):
    get_warehouse: Optional[Warehouse] = None


# setWarehouseName

class WarehouseRef(GraphQLModel):
    uuid: str
    name: Optional[str] = None


class SetWarehouseNamePayload(GraphQLModel):
    warehouse: Optional[WarehouseRef] = None


class SetWarehouseName(GraphQLModel):
    set_warehouse_name: Optional[SetWarehouseNamePayload] = None


# testDatabaseCredentials

class DatabaseTestDiagnostic(GraphQLModel):
    type: str = ""
    message: str = ""


class TestDatabaseCredentialsPayload(GraphQLModel):
    key: Optional[str] = None
    success: bool = False
    validations: List[DatabaseTestDiagnostic] = Field(default_factory=list)
    warnings: List[DatabaseTestDiagnostic] = Field(default_factory=list)


class TestDatabaseCredentials(GraphQLModel):
    # Keeps pytest from collecting this model as a test class.
    __test__ = False

    test_database_credentials: TestDatabaseCredentialsPayload


# addConnection

class AddedConnection(GraphQLModel):
    uuid: str
    created_on: str
    warehouse: WarehouseRef


class AddConnectionPayload(GraphQLModel):
    connection: AddedConnection


class AddConnection(GraphQLModel):
    add_connection: AddConnectionPayload


# updateCredentialsV2

class UpdateCredentialsPayload(GraphQLModel):
    success: bool = False
    updated_at: str = ""


class UpdateCredentialsV2(GraphQLModel):
    update_credentials_v2: UpdateCredentialsPayload


# removeConnection

class RemoveConnectionPayload(GraphQLModel):
    success: bool = False


class RemoveConnection(GraphQLModel):
    remove_connection: RemoveConnectionPayload
