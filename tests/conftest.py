"""Pytest configuration and fixtures."""

import copy
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mcprovider.client.graphql import GraphQLResult, MonteCarloClient
from mcprovider.core.config import Settings
from mcprovider.models import graphql as gql
from mcprovider.provider import MonteCarloProvider
from mcprovider.resources.transactional_warehouse import TransactionalWarehouseResource

WAREHOUSE_UUID = "8bfc4f4e-9d5a-4b6e-9a34-6b54d3a8a001"
CONNECTION_UUID = "2f6f5bb6-6a0c-4d3e-8f8e-1d52c8a0b002"
COLLECTOR_UUID = "c6d0a6c1-3b5e-4b35-9a1c-9e3b6f4c0003"

MUTATION_RESULTS = {
    "TestDatabaseCredentials": (
        gql.TestDatabaseCredentials,
        {"testDatabaseCredentials": {"key": "temp-key", "success": True, "validations": [], "warnings": []}},
    ),
    "AddConnection": (
        gql.AddConnection,
        {
            "addConnection": {
                "connection": {
                    "uuid": CONNECTION_UUID,
                    "createdOn": "2024-01-01T00:00:00+00:00",
                    "warehouse": {"uuid": WAREHOUSE_UUID, "name": "orders"},
                }
            }
        },
    ),
    "UpdateCredentialsV2": (
        gql.UpdateCredentialsV2,
        {"updateCredentialsV2": {"success": True, "updatedAt": "2024-02-01T00:00:00+00:00"}},
    ),
    "SetWarehouseName": (
        gql.SetWarehouseName,
        {"setWarehouseName": {"warehouse": {"uuid": WAREHOUSE_UUID, "name": "orders"}}},
    ),
    "RemoveConnection": (
        gql.RemoveConnection,
        {"removeConnection": {"success": True}},
    ),
}


def warehouse_payload(
    updated_on: Any = "2024-01-01T00:00:00+00:00",
    connection_type: str = "TRANSACTIONAL_DB",
    collector_uuid: str = COLLECTOR_UUID,
    connection_uuid: str = CONNECTION_UUID,
    name: str = "orders-remote",
) -> Dict[str, Any]:
    """``data`` of a getWarehouse response."""
    return {
        "getWarehouse": {
            "uuid": WAREHOUSE_UUID,
            "name": name,
            "connections": [
                {
                    "uuid": connection_uuid,
                    "type": connection_type,
                    "createdOn": "2023-12-01T00:00:00+00:00",
                    "updatedOn": updated_on,
                }
            ],
            "dataCollector": {"uuid": collector_uuid},
        }
    }


@pytest.fixture
def mock_client():
    """Monte Carlo client whose mutations answer with successful payloads."""
    client = MagicMock(spec=MonteCarloClient)
    client.results = copy.deepcopy(MUTATION_RESULTS)

    def mutate(operation, mutation, result_type, variables=None):
        model, payload = client.results[operation]
        return model.model_validate(payload)

    client.mutate.side_effect = mutate
    client.exec_raw.return_value = GraphQLResult(data=warehouse_payload())
    return client


@pytest.fixture
def resource(mock_client):
    """Transactional warehouse resource configured with the mock client."""
    resource = TransactionalWarehouseResource()
    diags = resource.configure(mock_client)
    assert not diags.has_error()
    return resource


@pytest.fixture
def plan() -> Dict[str, Any]:
    """Planned values for a new warehouse (computed attributes unknown)."""
    return {
        "uuid": None,
        "name": "orders",
        "db_type": "POSTGRES",
        "collector_uuid": COLLECTOR_UUID,
        "credentials": {
            "connection_uuid": None,
            "host": "db.example.com",
            "port": 5432,
            "database": "orders",
            "username": "monitor",
            "password": "s3cret",
            "updated_at": None,
        },
        "deletion_protection": True,
    }


@pytest.fixture
def state(plan) -> Dict[str, Any]:
    """Stored state of an existing warehouse."""
    stored = copy.deepcopy(plan)
    stored["uuid"] = WAREHOUSE_UUID
    stored["credentials"]["connection_uuid"] = CONNECTION_UUID
    stored["credentials"]["updated_at"] = "2024-01-01T00:00:00+00:00"
    return stored


@pytest.fixture
def provider(mock_client):
    """Provider configured with the mock client."""
    provider = MonteCarloProvider(settings=Settings(mc_api_key_id="id", mc_api_key_token="token"))
    provider.configure(mock_client)
    return provider


@pytest.fixture
def test_app(provider):
    """FastAPI app bound to the configured provider."""
    from mcprovider.main import create_app

    return create_app(provider)


@pytest.fixture
def client(test_app):
    """Test client for FastAPI app."""
    return TestClient(test_app, base_url="http://testserver")
