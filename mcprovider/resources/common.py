"""Connection helpers shared by warehouse resources."""

import logging
from typing import Iterable, Optional

from mcprovider.client.graphql import MonteCarloClient
from mcprovider.client.operations import (
    ADD_CONNECTION_MUTATION,
    TEST_DATABASE_CREDENTIALS_MUTATION,
    TRX_CONNECTION_TYPE,
    UPDATE_CREDENTIALS_MUTATION,
)
from mcprovider.core.diagnostics import Diagnostics
from mcprovider.models.graphql import (
    AddConnection,
    DatabaseTestDiagnostic,
    TestDatabaseCredentials,
    UpdateCredentialsV2,
)
from mcprovider.models.warehouse import TransactionalWarehouseResourceModel

logger = logging.getLogger(__name__)


class CredentialsRejected(Exception):
    """Raised when Monte Carlo refuses the credentials under test."""

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics
        super().__init__("database credentials test failed")


def database_test_diagnostics(entries: Iterable[DatabaseTestDiagnostic]) -> Diagnostics:
    """Turn credential-test findings into warnings (summary = message, detail = type)."""
    diags = Diagnostics()
    for entry in entries:
        diags.add_warning(entry.message, entry.type)
    return diags


def check_credentials(client: MonteCarloClient, data: TransactionalWarehouseResourceModel) -> str:
    """
    Validate credentials with Monte Carlo and return the temporary credentials key.

    Raises:
        CredentialsRejected: If the test reports failure
        APIException: On transport or GraphQL failure
    """
    credentials = data.credentials
    variables = {
        "connectionType": TRX_CONNECTION_TYPE,
        "dbType": (data.db_type or "").lower(),
        "host": credentials.host,
        "port": credentials.port,
        "dbName": credentials.database,
        "user": credentials.username,
        "password": credentials.password,
    }
    result = client.mutate(
        "TestDatabaseCredentials",
        TEST_DATABASE_CREDENTIALS_MUTATION,
        TestDatabaseCredentials,
        variables,
    )

    payload = result.test_database_credentials
    if not payload.success:
        diags = database_test_diagnostics(payload.warnings)
        diags.append_all(database_test_diagnostics(payload.validations))
        diags.add_error(
            connection_error_summary("TestDatabaseCredentials", "credentials test failed")
        )
        raise CredentialsRejected(diags)

    logger.info(
        f"Credentials for {credentials.host}:{credentials.port} passed the connection test",
        extra={"event": "credentials_tested", "db_type": data.db_type},
    )
    return payload.key or ""


def add_connection(
    client: MonteCarloClient,
    data: TransactionalWarehouseResourceModel,
    connection_type: str = TRX_CONNECTION_TYPE,
) -> AddConnection:
    """
    Test credentials and attach a new connection.

    Without a warehouse uuid a new warehouse of ``connection_type`` is created
    under the configured collector.
    """
    key = check_credentials(client, data)
    variables = {
        "dcId": data.collector_uuid,
        "dwId": data.uuid,
        "key": key,
        "name": data.name,
        "connectionType": connection_type,
        "createWarehouseType": connection_type if data.uuid is None else None,
    }
    result = client.mutate("AddConnection", ADD_CONNECTION_MUTATION, AddConnection, variables)

    connection = result.add_connection.connection
    logger.info(
        f"Added connection {connection.uuid} to warehouse {connection.warehouse.uuid}",
        extra={
            "event": "connection_added",
            "warehouse_uuid": connection.warehouse.uuid,
            "connection_uuid": connection.uuid,
        },
    )
    return result


def update_connection(
    client: MonteCarloClient, data: TransactionalWarehouseResourceModel
) -> UpdateCredentialsV2:
    """Test credentials and swap them onto the existing connection."""
    key = check_credentials(client, data)
    variables = {
        "connectionId": data.credentials.connection_uuid,
        "tempCredentialsKey": key,
    }
    result = client.mutate(
        "UpdateCredentialsV2", UPDATE_CREDENTIALS_MUTATION, UpdateCredentialsV2, variables
    )
    logger.info(
        f"Updated credentials of connection {data.credentials.connection_uuid}",
        extra={
            "event": "credentials_updated",
            "connection_uuid": data.credentials.connection_uuid,
        },
    )
    return result


def connection_error_summary(
    operation: Optional[str], message: str, default_operation: str = "Monte Carlo"
) -> str:
    """Summary line for a failed Monte Carlo mutation."""
    return f"MC client '{operation or default_operation}' mutation result - {message}"
