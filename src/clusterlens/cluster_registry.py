"""
clusterlens - cluster registry

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.errors import BrokerNotFound, UnknownCluster
from clusterlens.models import BrokerConfig, ClusterConfig, SchemaRegistryConfig
from clusterlens.typing import ClusterId
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from clusterlens.host_identity import HostIdentity


class ClusterRegistry(Mapping[ClusterId, ClusterConfig]):
    """Read-only lookup of the configured clusters by their sanitized id."""

    def __init__(self, clusters: Mapping[ClusterId, ClusterConfig]) -> None:
        self._clusters: Mapping[ClusterId, ClusterConfig] = MappingProxyType(dict(clusters))

    def __getitem__(self, cluster_id: ClusterId) -> ClusterConfig:
        return self._clusters[cluster_id]

    def __iter__(self) -> Iterator[ClusterId]:
        return iter(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def __repr__(self) -> str:
        return f"ClusterRegistry({list(self._clusters)!r})"

    def get_cluster(self, cluster_id: ClusterId) -> ClusterConfig:
        try:
            return self._clusters[cluster_id]
        except KeyError:
            raise UnknownCluster(f"Unknown clusterId {cluster_id!r}") from None

    def get_server_by_cluster_id(self, cluster_id: ClusterId) -> str:
        """Address of the first known broker of the cluster."""
        cluster = self.get_cluster(cluster_id)
        if not cluster.brokers:
            raise BrokerNotFound(f"Broker not found for clusterId {cluster_id!r}")
        return cluster.brokers[0].address

    def get_kafka_properties(self, cluster_id: ClusterId) -> Mapping[str, Any]:
        return self.get_cluster(cluster_id).kafka

    def get_client_config(self, cluster_id: ClusterId) -> dict[str, Any]:
        """Configuration for the Kafka admin/consumer client of a cluster.

        Explicit management client properties take precedence over the
        bootstrap list derived from the configured brokers.
        """
        cluster = self.get_cluster(cluster_id)
        if not cluster.brokers:
            raise BrokerNotFound(f"Broker not found for clusterId {cluster_id!r}")
        client_config: dict[str, Any] = {"bootstrap.servers": ",".join(broker.address for broker in cluster.brokers)}
        client_config.update(cluster.kafka)
        return client_config

    def get_schema_registry(self, cluster_id: ClusterId) -> SchemaRegistryConfig | None:
        return self.get_cluster(cluster_id).schema_registry

    def get_broker_config(
        self,
        cluster_id: ClusterId,
        host: str,
        port: int,
        host_identity: HostIdentity,
    ) -> BrokerConfig | None:
        for broker in self.get_cluster(cluster_id).brokers:
            if broker.port == port and host_identity.equivalent(host, broker.host):
                return broker
        return None
