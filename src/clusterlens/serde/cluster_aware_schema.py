"""
clusterlens - cluster aware schema

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.cluster_registry import ClusterRegistry
from clusterlens.errors import UnknownCluster
from clusterlens.models import SchemaRegistryConfig
from clusterlens.serde.formatter import MessageFormatter
from clusterlens.serde.formatter_registry import FormatterRegistry
from clusterlens.serde.message_format import MessageFormat
from clusterlens.typing import ClusterId, SchemaId
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

import logging

LOG = logging.getLogger(__name__)


class SchemaRegistryFacade(Protocol):
    """Access to the schema registry of one cluster.

    The facade owns the registry protocol and its caching; a missing schema id
    is classified as a raw `MessageFormat.STRING` payload.
    """

    def classify(self, topic: str, schema_id: SchemaId | None, is_key: bool) -> MessageFormat:
        ...

    def get_schema(self, schema_id: SchemaId) -> str | None:
        ...


SchemaRegistryFacadeFactory = Callable[[ClusterId, SchemaRegistryConfig], SchemaRegistryFacade]


@dataclass(frozen=True)
class ClusterAwareSchema:
    schema_registry_facade: SchemaRegistryFacade
    formatters: FormatterRegistry

    def get_schema_format(self, topic: str, schema_id: SchemaId | None, is_key: bool) -> MessageFormat:
        return self.schema_registry_facade.classify(topic, schema_id, is_key)

    def get_formatter(self, message_format: MessageFormat) -> MessageFormatter:
        return self.formatters.get(message_format)

    def resolve_formatter(self, topic: str, schema_id: SchemaId | None, is_key: bool) -> MessageFormatter:
        return self.get_formatter(self.get_schema_format(topic, schema_id, is_key))


class ClusterAwareSchemas:
    """Per cluster formatter resolution.

    Clusters without a schema registry decode every record as a string.
    """

    def __init__(
        self,
        registry: ClusterRegistry,
        formatters: FormatterRegistry,
        facade_factory: SchemaRegistryFacadeFactory,
    ) -> None:
        schemas: dict[ClusterId, ClusterAwareSchema] = {}
        for cluster_id, cluster in registry.items():
            if cluster.schema_registry is None:
                LOG.info("Cluster %s has no schema registry, records are decoded as strings", cluster_id)
                continue
            schemas[cluster_id] = ClusterAwareSchema(
                schema_registry_facade=facade_factory(cluster_id, cluster.schema_registry),
                formatters=formatters,
            )
        self._registry = registry
        self._formatters = formatters
        self._schemas: Mapping[ClusterId, ClusterAwareSchema] = MappingProxyType(schemas)

    def get(self, cluster_id: ClusterId) -> ClusterAwareSchema | None:
        if cluster_id not in self._registry:
            raise UnknownCluster(f"Unknown clusterId {cluster_id!r}")
        return self._schemas.get(cluster_id)

    def resolve_formatter(
        self,
        cluster_id: ClusterId,
        topic: str,
        schema_id: SchemaId | None,
        is_key: bool,
    ) -> MessageFormatter:
        cluster_aware_schema = self.get(cluster_id)
        if cluster_aware_schema is None:
            return self._formatters.get(MessageFormat.STRING)
        return cluster_aware_schema.resolve_formatter(topic, schema_id, is_key)
