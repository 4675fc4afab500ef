"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clusterlens.serde.message_format import MessageFormat
    from clusterlens.typing import ClusterId


class ConfigError(Exception):
    pass


class ClusterIdCollision(ConfigError):
    def __init__(self, cluster_id: ClusterId, first_name: str, second_name: str) -> None:
        super().__init__(
            f"Cluster names {first_name!r} and {second_name!r} both resolve to the cluster id {cluster_id!r}"
        )
        self.cluster_id = cluster_id
        self.first_name = first_name
        self.second_name = second_name


class UnknownCluster(Exception):
    pass


class BrokerNotFound(Exception):
    pass


class FormatterMissing(Exception):
    def __init__(self, missing: list[MessageFormat]) -> None:
        super().__init__(f"No formatter registered for message formats: {', '.join(str(f) for f in missing)}")
        self.missing = missing


class HostResolutionFailure(Exception):
    pass


class InvalidMessageHeader(Exception):
    pass
