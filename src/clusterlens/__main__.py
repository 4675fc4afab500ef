"""
clusterlens - main

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.container import ClusterLensContainer
from clusterlens.errors import ConfigError, FormatterMissing
from clusterlens.logging_setup import configure_logging, log_config_without_secrets
from clusterlens.version import __version__

import argparse
import logging
import sys

LOG = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="clusterlens", description="Resolve and validate the cluster configuration.")
    parser.add_argument("--version", action="version", help="show program version", version=__version__)
    parser.add_argument("--env-file", help="dotenv file to read the configuration from")
    args = parser.parse_args(argv)

    container = ClusterLensContainer()
    if args.env_file:
        container.config.add_kwargs(env_file=args.env_file)

    try:
        config = container.config()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        LOG.error("%s", e)
        return 1

    configure_logging(config=config)
    log_config_without_secrets(config)

    try:
        state = container.cluster_state()
        formatter_registry = container.formatter_registry()
    except (ConfigError, FormatterMissing) as e:
        LOG.error("Startup failed: %s", e)
        return 1

    for cluster_id, cluster in state.registry.items():
        LOG.info(
            "Cluster %s: brokers=%s schema_registry=%s",
            cluster_id,
            [broker.address for broker in cluster.brokers],
            cluster.schema_registry.url if cluster.schema_registry else None,
        )
    LOG.info("Formatters available for %s", [str(message_format) for message_format in formatter_registry.formats()])
    return 0


if __name__ == "__main__":
    sys.exit(main())
