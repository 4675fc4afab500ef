"""
clusterlens - cluster model

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.constants import CLUSTER_ID_REPLACEMENT, CLUSTER_ID_SPECIAL_CHARS, HOST_PORT_SEPARATOR
from clusterlens.typing import ClusterId
from collections.abc import Mapping
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from types import MappingProxyType
from typing import Any

import re

_SPECIAL_CHARS_RE = re.compile(CLUSTER_ID_SPECIAL_CHARS)


def sanitize_cluster_id(name: str) -> ClusterId:
    return ClusterId(_SPECIAL_CHARS_RE.sub(CLUSTER_ID_REPLACEMENT, name))


class _FrozenModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="forbid")


class BrokerConfig(_FrozenModel):
    host: str
    port: int
    jmx_port: int | None = None
    jmx_user: str | None = None
    jmx_password: str | None = None

    @property
    def address(self) -> str:
        return f"{self.host}{HOST_PORT_SEPARATOR}{self.port}"


class SchemaRegistryAuth(_FrozenModel):
    username: str
    password: str


class SchemaRegistryConfig(_FrozenModel):
    url: str
    auth: SchemaRegistryAuth | None = None


class ClusterConfig(_FrozenModel):
    """A single Kafka cluster as configured by the operator.

    The cluster level JMX settings are only defaults; they are copied to every
    broker while the cluster registry is being built.
    """

    name: str
    brokers: tuple[BrokerConfig, ...] = ()
    schema_registry: SchemaRegistryConfig | None = None
    # Properties handed over verbatim to the Kafka admin/consumer clients
    kafka: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    jmx_port: int | None = None
    jmx_user: str | None = None
    jmx_password: str | None = None

    @field_validator("kafka")
    @classmethod
    def freeze_kafka_properties(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("kafka")
    def serialize_kafka_properties(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    @property
    def sanitized_id(self) -> ClusterId:
        return sanitize_cluster_id(self.name)
