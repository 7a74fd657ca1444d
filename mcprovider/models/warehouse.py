"""Transactional warehouse resource state models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

DbType = Literal["POSTGRES", "MYSQL", "SQL-SERVER"]

# Stored in place of credential fields once the remote connection changed out of band.
UNKNOWN_REMOTE_VALUE = "(unknown remote value)"
UNKNOWN_REMOTE_PORT = -1


class TransactionalCredentials(BaseModel):
    """Connection credentials bound to the warehouse."""

    connection_uuid: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = Field(default=None, repr=False)
    password: Optional[str] = Field(default=None, repr=False)
    updated_at: Optional[str] = None


class TransactionalWarehouseResourceModel(BaseModel):
    """State of a transactional warehouse (schema version 1)."""

    uuid: Optional[str] = None
    name: Optional[str] = None
    db_type: Optional[DbType] = None
    collector_uuid: Optional[str] = None
    credentials: TransactionalCredentials = Field(default_factory=TransactionalCredentials)
    deletion_protection: Optional[bool] = True


class ConfigurationV0(BaseModel):
    """Flat connection configuration used by schema version 0."""

    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = Field(default=None, repr=False)
    password: Optional[str] = Field(default=None, repr=False)


class TransactionalWarehouseResourceModelV0(BaseModel):
    """State of a transactional warehouse (schema version 0)."""

    uuid: Optional[str] = None
    connection_uuid: Optional[str] = None
    name: Optional[str] = None
    db_type: Optional[DbType] = None
    collector_uuid: Optional[str] = None
    configuration: ConfigurationV0 = Field(default_factory=ConfigurationV0)
    deletion_protection: Optional[bool] = None
