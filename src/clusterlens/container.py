"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""

from clusterlens.cluster_resolver import initialize
from clusterlens.config import load_config
from clusterlens.host_identity import HostIdentity
from clusterlens.serde.formatter_registry import default_formatter_registry
from dependency_injector import containers, providers

import os


class ClusterLensContainer(containers.DeclarativeContainer):
    config = providers.Singleton(load_config, env_file=os.environ.get("CLUSTERLENS_DOTENV", None))

    cluster_state = providers.Singleton(initialize, config=config)

    formatter_registry = providers.Singleton(default_formatter_registry)

    host_identity = providers.Singleton(HostIdentity.from_config, config=config)
