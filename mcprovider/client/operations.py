"""GraphQL documents issued against the Monte Carlo API."""

# Connection type sent in requests and the one reported back on warehouse connections.
TRX_CONNECTION_TYPE = "transactional-db"
TRX_CONNECTION_TYPE_RESPONSE = "TRANSACTIONAL_DB"

GET_WAREHOUSE_QUERY = """
query getWarehouse($uuid: UUID) {
  getWarehouse(uuid: $uuid) {
    uuid
    name
    connections {
      uuid
      type
      createdOn
      updatedOn
    }
    dataCollector {
      uuid
    }
  }
}
""".strip()

SET_WAREHOUSE_NAME_MUTATION = """
mutation setWarehouseName($dwId: UUID!, $name: String!) {
  setWarehouseName(dwId: $dwId, name: $name) {
    warehouse {
      uuid
      name
    }
  }
}
""".strip()

TEST_DATABASE_CREDENTIALS_MUTATION = """
mutation testDatabaseCredentials(
  $connectionType: String,
  $dbType: String,
  $host: String,
  $port: Int,
  $dbName: String,
  $user: String,
  $password: String
) {
  testDatabaseCredentials(
    connectionType: $connectionType,
    dbType: $dbType,
    host: $host,
    port: $port,
    dbName: $dbName,
    user: $user,
    password: $password
  ) {
    key
    success
    validations {
      type
      message
    }
    warnings {
      type
      message
    }
  }
}
""".strip()

ADD_CONNECTION_MUTATION = """
mutation addConnection(
  $dcId: UUID,
  $dwId: UUID,
  $key: String!,
  $name: String,
  $connectionType: String!,
  $createWarehouseType: String
) {
  addConnection(
    dcId: $dcId,
    dwId: $dwId,
    key: $key,
    name: $name,
    connectionType: $connectionType,
    createWarehouseType: $createWarehouseType
  ) {
    connection {
      uuid
      createdOn
      warehouse {
        uuid
        name
      }
    }
  }
}
""".strip()

UPDATE_CREDENTIALS_MUTATION = """
mutation updateCredentialsV2($connectionId: UUID!, $tempCredentialsKey: String!) {
  updateCredentialsV2(connectionId: $connectionId, tempCredentialsKey: $tempCredentialsKey) {
    success
    updatedAt
  }
}
""".strip()

REMOVE_CONNECTION_MUTATION = """
mutation removeConnection($connectionId: UUID!) {
  removeConnection(connectionId: $connectionId) {
    success
  }
}
""".strip()
