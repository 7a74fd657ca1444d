"""Transactional warehouse resource."""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from mcprovider.client.graphql import MonteCarloClient, decode
from mcprovider.client.operations import (
    GET_WAREHOUSE_QUERY,
    REMOVE_CONNECTION_MUTATION,
    SET_WAREHOUSE_NAME_MUTATION,
    TRX_CONNECTION_TYPE_RESPONSE,
)
from mcprovider.core.diagnostics import Diagnostics
from mcprovider.core.errors import (
    APIException,
    MonteCarloClientError,
    format_graphql_errors,
)
from mcprovider.core.metrics import metrics
from mcprovider.models.graphql import GetWarehouse, RemoveConnection, SetWarehouseName
from mcprovider.models.lifecycle import (
    CreateRequest,
    DeleteRequest,
    ImportStateRequest,
    MetadataResponse,
    ReadRequest,
    ResourceResponse,
    UpdateRequest,
    UpgradeStateRequest,
    ValidateConfigRequest,
)
from mcprovider.models.warehouse import (
    UNKNOWN_REMOTE_PORT,
    UNKNOWN_REMOTE_VALUE,
    TransactionalCredentials,
    TransactionalWarehouseResourceModel,
    TransactionalWarehouseResourceModelV0,
)
from mcprovider.resources.common import (
    CredentialsRejected,
    add_connection,
    connection_error_summary,
    update_connection,
)
from mcprovider.resources.schema import (
    REQUIRES_REPLACE_IF_CONFIGURED,
    USE_STATE_FOR_UNKNOWN,
    Attribute,
    Schema,
)

logger = logging.getLogger(__name__)

RESOURCE_NAME = "transactional_warehouse"
DB_TYPES = ["POSTGRES", "MYSQL", "SQL-SERVER"]

SCHEMA = Schema(
    version=1,
    attributes={
        "uuid": Attribute(type="string", computed=True, plan_modifiers=[USE_STATE_FOR_UNKNOWN]),
        "name": Attribute(type="string", required=True),
        "db_type": Attribute(type="string", required=True, one_of=DB_TYPES),
        "collector_uuid": Attribute(
            type="string", required=True, plan_modifiers=[REQUIRES_REPLACE_IF_CONFIGURED]
        ),
        "credentials": Attribute(
            type="object",
            required=True,
            attributes={
                "connection_uuid": Attribute(
                    type="string", computed=True, plan_modifiers=[USE_STATE_FOR_UNKNOWN]
                ),
                "host": Attribute(type="string", required=True),
                "port": Attribute(type="int64", required=True),
                "database": Attribute(type="string", required=True),
                "username": Attribute(type="string", required=True, sensitive=True),
                "password": Attribute(type="string", required=True, sensitive=True),
                "updated_at": Attribute(type="string", computed=True),
            },
        ),
        "deletion_protection": Attribute(type="bool", optional=True, computed=True, default=True),
    },
)

# Layout of states written before credentials moved into their own block.
PRIOR_SCHEMA_V0 = Schema(
    version=0,
    attributes={
        "uuid": Attribute(type="string", computed=True, plan_modifiers=[USE_STATE_FOR_UNKNOWN]),
        "connection_uuid": Attribute(
            type="string", computed=True, plan_modifiers=[USE_STATE_FOR_UNKNOWN]
        ),
        "name": Attribute(type="string", required=True),
        "db_type": Attribute(
            type="string",
            required=True,
            one_of=DB_TYPES,
            plan_modifiers=[REQUIRES_REPLACE_IF_CONFIGURED],
        ),
        "collector_uuid": Attribute(
            type="string", required=True, plan_modifiers=[REQUIRES_REPLACE_IF_CONFIGURED]
        ),
        "configuration": Attribute(
            type="object",
            required=True,
            attributes={
                "host": Attribute(type="string", required=True),
                "port": Attribute(type="int64", required=True),
                "database": Attribute(
                    type="string", required=True, plan_modifiers=[REQUIRES_REPLACE_IF_CONFIGURED]
                ),
                "username": Attribute(type="string", required=True, sensitive=True),
                "password": Attribute(type="string", required=True, sensitive=True),
            },
        ),
        "deletion_protection": Attribute(type="bool", optional=True, computed=True, default=True),
    },
)


class TransactionalWarehouseResource:
    """Maps the transactional warehouse lifecycle onto Monte Carlo API calls."""

    def __init__(self, client: Optional[MonteCarloClient] = None):
        self.client = client

    def metadata(self, provider_type_name: str) -> MetadataResponse:
        return MetadataResponse(type_name=f"{provider_type_name}_{RESOURCE_NAME}")

    def schema(self) -> Schema:
        return SCHEMA

    def state_upgraders(self) -> Dict[int, Schema]:
        """Prior schemas that ``upgrade_state`` can migrate from, keyed by version."""
        return {0: PRIOR_SCHEMA_V0}

    def validate_config(self, req: ValidateConfigRequest) -> ResourceResponse:
        diags = SCHEMA.validate_config(req.config)
        return self._respond("validate", None, diags)

    def configure(self, provider_data: Any) -> Diagnostics:
        """
        Attach the provider's Monte Carlo client.

        ``None`` means the provider has not been configured yet; the call is a no-op.
        """
        diags = Diagnostics()
        if provider_data is None:
            return diags
        if not isinstance(provider_data, MonteCarloClient):
            diags.add_error(
                "Unexpected Resource Configure Type",
                f"Expected MonteCarloClient, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return diags
        self.client = provider_data
        return diags

    def create(self, req: CreateRequest) -> ResourceResponse:
        diags = Diagnostics()
        data = _decode_state(req.plan, diags)
        if data is None:
            return self._respond("create", None, diags)

        if self._require_client(diags):
            return self._respond("create", None, diags)

        try:
            result = add_connection(self.client, data)
        except CredentialsRejected as e:
            diags.append_all(e.diagnostics)
            return self._respond("create", None, diags)
        except APIException as e:
            diags.add_error(
                connection_error_summary(_operation_of(e), e.message, "AddConnection")
            )
            return self._respond("create", None, diags)

        connection = result.add_connection.connection
        data.uuid = connection.warehouse.uuid
        data.credentials.updated_at = connection.created_on
        data.credentials.connection_uuid = connection.uuid
        return self._respond("create", _dump(data), diags)

    def read(self, req: ReadRequest) -> ResourceResponse:
        diags = Diagnostics()
        data = _decode_state(req.state, diags)
        if data is None:
            return self._respond("read", req.state, diags)

        if self._require_client(diags):
            return self._respond("read", req.state, diags)

        try:
            raw = self.client.exec_raw(
                "GetWarehouse", GET_WAREHOUSE_QUERY, {"uuid": data.uuid}
            )
        except MonteCarloClientError as e:
            diags.add_error(f"MC client 'GetWarehouse' query result - {e.message}")
            return self._respond("read", req.state, diags)

        graphql_error = format_graphql_errors(raw.errors) if raw.errors else None

        try:
            result = decode("GetWarehouse", raw.data, GetWarehouse)
        except MonteCarloClientError as e:
            diags.add_error(
                f"MC client 'GetWarehouse' query failed to unmarshal data - {e.message}"
            )
            return self._respond("read", req.state, diags)

        warehouse = result.get_warehouse
        if warehouse is None:
            summary = (
                f"MC client 'GetWarehouse' query failed to find warehouse [uuid: {data.uuid}]. "
                "This resource will be removed from the Terraform state without deletion."
            )
            # a response without warehouse data may or may not carry an error
            if graphql_error:
                summary = f"{summary} - {graphql_error}"
            diags.add_warning(summary)
            return self._respond("read", None, diags)

        read_collector_uuid = warehouse.data_collector.uuid
        if read_collector_uuid != data.collector_uuid:
            diags.add_warning(
                f"Obtained Transactional warehouse with [uuid: {data.uuid}] but its Data "
                "Collector UUID does not match with configured value "
                f"[obtained: {read_collector_uuid}, configured: {data.collector_uuid}]. "
                "Transactional warehouse might have been moved to other Data Collector "
                "externally. This resource will be removed from the Terraform state "
                "without deletion."
            )
            return self._respond("read", None, diags)

        stored = data.credentials
        connection = next(
            (c for c in warehouse.connections if c.uuid == stored.connection_uuid), None
        )
        if connection is None:
            diags.add_warning(
                f"Obtained Transactional warehouse [uuid: {data.uuid}] but its connection "
                f"[connection_uuid: {stored.connection_uuid}] no longer exists. This resource "
                "will be removed from the Terraform state without deletion."
            )
            return self._respond("read", None, diags)

        if connection.type != TRX_CONNECTION_TYPE_RESPONSE:
            diags.add_error(
                f"Obtained Warehouse [uuid: {data.uuid}, connection_uuid: {connection.uuid}] "
                f"but got unexpected connection type '{connection.type}'",
                "This resource will be removed from the Terraform state without deletion. "
                "Users can manually fix remote state or delete this resource from the "
                "Terraform configuration.",
            )
            return self._respond("read", None, diags)

        read_credentials = stored.model_copy()
        read_credentials.updated_at = connection.updated_on or connection.created_on
        if read_credentials.updated_at != stored.updated_at:
            logger.info(
                f"Connection {connection.uuid} changed remotely, credentials marked unknown",
                extra={"event": "credentials_drift", "connection_uuid": connection.uuid},
            )
            _mark_credentials_unknown(read_credentials)

        data.credentials = read_credentials
        data.name = warehouse.name
        return self._respond("read", _dump(data), diags)

    def update(self, req: UpdateRequest) -> ResourceResponse:
        diags = Diagnostics()
        data = _decode_state(req.plan, diags)
        if data is None:
            return self._respond("update", req.state, diags)

        if self._require_client(diags):
            return self._respond("update", req.state, diags)

        try:
            self.client.mutate(
                "SetWarehouseName",
                SET_WAREHOUSE_NAME_MUTATION,
                SetWarehouseName,
                {"dwId": data.uuid, "name": data.name},
            )
        except APIException as e:
            diags.add_error(f"MC client 'SetWarehouseName' mutation result - {e.message}")
            return self._respond("update", req.state, diags)

        try:
            if data.credentials.connection_uuid is None:
                added = add_connection(self.client, data).add_connection.connection
                data.credentials.updated_at = added.created_on
                data.credentials.connection_uuid = added.uuid
            updated = update_connection(self.client, data)
        except CredentialsRejected as e:
            diags.append_all(e.diagnostics)
            return self._respond("update", req.state, diags)
        except APIException as e:
            diags.add_error(
                connection_error_summary(_operation_of(e), e.message, "UpdateCredentialsV2")
            )
            return self._respond("update", req.state, diags)

        data.credentials.updated_at = updated.update_credentials_v2.updated_at
        return self._respond("update", _dump(data), diags)

    def delete(self, req: DeleteRequest) -> ResourceResponse:
        diags = Diagnostics()
        data = _decode_state(req.state, diags)
        if data is None:
            return self._respond("delete", req.state, diags)

        if data.deletion_protection:
            diags.add_error(
                "Failed to delete warehouse because deletion_protection is set to true. "
                "Set it to false to proceed with warehouse deletion",
                "Deletion protection flag will prevent this resource deletion even if it was "
                "already deleted from the real system. For reasons why this is preferred "
                "behaviour check out documentation.",
            )
            return self._respond("delete", req.state, diags)

        if self._require_client(diags):
            return self._respond("delete", req.state, diags)

        try:
            result = self.client.mutate(
                "RemoveConnection",
                REMOVE_CONNECTION_MUTATION,
                RemoveConnection,
                {"connectionId": data.credentials.connection_uuid},
            )
        except APIException as e:
            diags.add_error(f"MC client 'RemoveConnection' mutation result - {e.message}")
            return self._respond("delete", req.state, diags)

        if not result.remove_connection.success:
            diags.add_warning(
                "MC client 'RemoveConnection' mutation - success = false, connection probably "
                "already doesn't exists. This resource will continue with its deletion"
            )
        return self._respond("delete", None, diags)

    def import_state(self, req: ImportStateRequest) -> ResourceResponse:
        diags = Diagnostics()
        ids = req.id.split(",")
        if len(ids) != 3 or not all(ids):
            diags.add_error(
                "Unexpected Import Identifier",
                "Expected import identifier with format: "
                f"<warehouse_uuid>,<connection_uuid>,<data_collector_uuid>. Got: {req.id!r}",
            )
            return self._respond("import", None, diags)

        warehouse_uuid, connection_uuid, collector_uuid = ids
        data = TransactionalWarehouseResourceModel(
            uuid=warehouse_uuid,
            collector_uuid=collector_uuid,
            credentials=TransactionalCredentials(connection_uuid=connection_uuid),
        )
        return self._respond("import", _dump(data), diags)

    def upgrade_state(self, req: UpgradeStateRequest) -> ResourceResponse:
        diags = Diagnostics()
        if req.version >= SCHEMA.version or "credentials" in req.state:
            return self._respond("upgrade", req.state, diags)
        if req.version not in self.state_upgraders():
            diags.add_error(
                "Unable to Upgrade Resource State",
                f"No state upgrader is registered for schema version {req.version} "
                f"of {RESOURCE_NAME}.",
            )
            return self._respond("upgrade", None, diags)

        try:
            prior = TransactionalWarehouseResourceModelV0.model_validate(req.state)
        except ValidationError as e:
            _add_validation_errors(e, diags)
            return self._respond("upgrade", None, diags)

        configuration = prior.configuration
        upgraded = TransactionalWarehouseResourceModel(
            uuid=prior.uuid,
            collector_uuid=prior.collector_uuid,
            name=prior.name,
            db_type=prior.db_type,
            credentials=TransactionalCredentials(
                connection_uuid=prior.connection_uuid,
                host=configuration.host,
                port=configuration.port,
                database=configuration.database,
                username=configuration.username,
                password=configuration.password,
                updated_at=None,
            ),
            deletion_protection=(
                prior.deletion_protection if prior.deletion_protection is not None else True
            ),
        )
        logger.info(
            f"Upgraded {RESOURCE_NAME} state [uuid: {prior.uuid}] from version 0 to {SCHEMA.version}",
            extra={"event": "state_upgraded", "warehouse_uuid": prior.uuid},
        )
        return self._respond("upgrade", _dump(upgraded), diags)

    def _require_client(self, diags: Diagnostics) -> bool:
        """Add an error and return True when the provider never configured a client."""
        if self.client is None:
            diags.add_error(
                "Unconfigured Monte Carlo client",
                "The provider has not been configured. Configure it before managing resources.",
            )
            return True
        return False

    @staticmethod
    def _respond(
        operation: str, state: Optional[Dict[str, Any]], diags: Diagnostics
    ) -> ResourceResponse:
        if diags.has_error():
            outcome = "error"
        elif state is None:
            outcome = "removed"
        else:
            outcome = "ok"
        metrics.record_resource_operation(RESOURCE_NAME, operation, outcome)
        return ResourceResponse(state=state, diagnostics=list(diags))


def _decode_state(
    raw: Dict[str, Any], diags: Diagnostics
) -> Optional[TransactionalWarehouseResourceModel]:
    try:
        return TransactionalWarehouseResourceModel.model_validate(raw)
    except ValidationError as e:
        _add_validation_errors(e, diags)
        return None


def _add_validation_errors(error: ValidationError, diags: Diagnostics) -> None:
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"])
        diags.add_error("Value Conversion Error", item["msg"], attribute=path or None)


def _mark_credentials_unknown(credentials: TransactionalCredentials) -> None:
    credentials.host = UNKNOWN_REMOTE_VALUE
    credentials.port = UNKNOWN_REMOTE_PORT
    credentials.database = UNKNOWN_REMOTE_VALUE
    credentials.username = UNKNOWN_REMOTE_VALUE
    credentials.password = UNKNOWN_REMOTE_VALUE


def _operation_of(error: APIException) -> Optional[str]:
    return getattr(error, "operation", None)


def _dump(data: TransactionalWarehouseResourceModel) -> Dict[str, Any]:
    return data.model_dump()
