"""
clusterlens - configuration

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.constants import (
    DEFAULT_HOST_RESOLUTION_CACHE_SIZE,
    DEFAULT_HOST_RESOLUTION_CACHE_TTL,
    DEFAULT_HOST_RESOLUTION_WORKERS,
    DEFAULT_INSTALLATION_ID_FILE,
)
from clusterlens.errors import ConfigError
from clusterlens.models import ClusterConfig
from collections.abc import Mapping
from dataclasses import dataclass
from pydantic import field_validator, ValidationError
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing import Annotated, Any, Literal, Union

import logging

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimpleClusterSource:
    """Flat list of `host:port` bootstrap servers, one cluster per entry."""

    bootstrap_servers: tuple[str, ...]
    schema_registry_url: str | None = None


@dataclass(frozen=True)
class AdvancedClusterSource:
    clusters: tuple[ClusterConfig, ...]


ClusterSource = Union[SimpleClusterSource, AdvancedClusterSource]


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="clusterlens_", env_ignore_empty=True, env_nested_delimiter="__")

    bootstrap_servers: Annotated[list[str], NoDecode] = []
    schema_registry_url: str | None = None
    clusters: list[ClusterConfig] | None = None
    installation_id_file: str = DEFAULT_INSTALLATION_ID_FILE
    host_resolution_workers: int = DEFAULT_HOST_RESOLUTION_WORKERS
    host_resolution_cache_ttl: float = DEFAULT_HOST_RESOLUTION_CACHE_TTL
    host_resolution_cache_size: int = DEFAULT_HOST_RESOLUTION_CACHE_SIZE
    log_handler: Literal["stdout", "systemd"] = "stdout"
    log_level: str = "INFO"
    log_format: str = "%(name)-20s\t%(threadName)s\t%(levelname)-8s\t%(message)s"

    @field_validator("bootstrap_servers", mode="before")
    @classmethod
    def split_bootstrap_servers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [server.strip() for server in value.split(",") if server.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    def cluster_source(self) -> ClusterSource:
        if self.clusters is not None:
            if self.bootstrap_servers:
                LOG.warning(
                    "Both clusters and bootstrap_servers are configured, ignoring bootstrap_servers %s",
                    self.bootstrap_servers,
                )
            return AdvancedClusterSource(clusters=tuple(self.clusters))
        schema_registry_url = self.schema_registry_url
        if schema_registry_url is not None and not schema_registry_url.strip():
            schema_registry_url = None
        return SimpleClusterSource(bootstrap_servers=tuple(self.bootstrap_servers), schema_registry_url=schema_registry_url)


def load_config(raw: Mapping[str, Any] | None = None, *, env_file: str | None = None) -> Config:
    """Build the configuration from the environment, optionally overridden by `raw`."""
    try:
        return Config(_env_file=env_file, _env_file_encoding="utf-8", **(raw or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def read_env_file(env_file_path: str) -> Config:
    return load_config(env_file=env_file_path)
