"""
clusterlens - cluster configuration resolution

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.cluster_registry import ClusterRegistry
from clusterlens.config import AdvancedClusterSource, ClusterSource, Config, load_config, SimpleClusterSource
from clusterlens.constants import HOST_PORT_SEPARATOR
from clusterlens.errors import ClusterIdCollision, ConfigError
from clusterlens.installation import resolve_installation_id
from clusterlens.models import BrokerConfig, ClusterConfig, sanitize_cluster_id, SchemaRegistryConfig
from clusterlens.typing import ClusterId, InstallationId
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import logging

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterState:
    registry: ClusterRegistry
    installation_id: InstallationId


def parse_bootstrap_server(bootstrap_server: str) -> BrokerConfig:
    # Only the first separator splits, IPv6 literals are not supported
    host, separator, port = bootstrap_server.partition(HOST_PORT_SEPARATOR)
    if not separator or not host:
        raise ConfigError(f"Could not parse bootstrap server {bootstrap_server}")
    try:
        return BrokerConfig(host=host, port=int(port))
    except ValueError:
        raise ConfigError(f"Could not parse bootstrap server {bootstrap_server}") from None


def _collect(clusters: Iterable[ClusterConfig]) -> ClusterRegistry:
    cluster_config: dict[ClusterId, ClusterConfig] = {}
    for cluster in clusters:
        cluster_id = cluster.sanitized_id
        existing = cluster_config.get(cluster_id)
        if existing is not None:
            raise ClusterIdCollision(cluster_id, existing.name, cluster.name)
        cluster_config[cluster_id] = cluster
    return ClusterRegistry(cluster_config)


def resolve_simple(source: SimpleClusterSource) -> ClusterRegistry:
    LOG.info(
        "Using simple configuration: bootstrap_servers=%s, schema_registry_url=%s",
        list(source.bootstrap_servers),
        source.schema_registry_url,
    )
    schema_registry = SchemaRegistryConfig(url=source.schema_registry_url) if source.schema_registry_url else None
    clusters = []
    for bootstrap_server in source.bootstrap_servers:
        broker = parse_bootstrap_server(bootstrap_server)
        clusters.append(
            ClusterConfig(
                name=sanitize_cluster_id(bootstrap_server),
                brokers=(broker,),
                schema_registry=schema_registry,
            )
        )
    return _collect(clusters)


def propagate_jmx_config(cluster: ClusterConfig) -> ClusterConfig:
    """Copy the cluster level JMX settings to every broker of the cluster.

    Each setting is applied on its own and replaces whatever the broker had.
    """
    update: dict[str, Any] = {}
    if cluster.jmx_port is not None:
        LOG.info("Propagating JMX port %s from cluster %s to brokers", cluster.jmx_port, cluster.name)
        update["jmx_port"] = cluster.jmx_port
    if cluster.jmx_user is not None:
        LOG.info("Propagating JMX user %s from cluster %s to brokers", cluster.jmx_user, cluster.name)
        update["jmx_user"] = cluster.jmx_user
    if cluster.jmx_password is not None:
        LOG.info("Propagating JMX password from cluster %s to brokers", cluster.name)
        update["jmx_password"] = cluster.jmx_password
    if not update:
        return cluster
    brokers = tuple(broker.model_copy(update=update) for broker in cluster.brokers)
    return cluster.model_copy(update={"brokers": brokers})


def resolve_advanced(source: AdvancedClusterSource) -> ClusterRegistry:
    LOG.info("Advanced configuration present, clusters=%s", [cluster.name for cluster in source.clusters])
    registry = _collect(source.clusters)
    LOG.info("Propagating jmx config values from clusters to brokers")
    return ClusterRegistry({cluster_id: propagate_jmx_config(cluster) for cluster_id, cluster in registry.items()})


def resolve_clusters(source: ClusterSource) -> ClusterRegistry:
    match source:
        case AdvancedClusterSource():
            return resolve_advanced(source)
        case SimpleClusterSource():
            return resolve_simple(source)
        case _:
            raise ConfigError(f"Unsupported cluster configuration {source!r}")


def initialize(config: Config) -> ClusterState:
    registry = resolve_clusters(config.cluster_source())
    installation_id = resolve_installation_id(Path(config.installation_id_file))
    LOG.info("Initialized %d cluster(s) %s, installation id %s", len(registry), list(registry), installation_id)
    return ClusterState(registry=registry, installation_id=installation_id)


def resolve(raw: Mapping[str, Any]) -> ClusterState:
    """Validate raw operator input and run the initialization pass on it."""
    return initialize(load_config(raw))
