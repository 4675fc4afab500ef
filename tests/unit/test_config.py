"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from clusterlens.config import AdvancedClusterSource, Config, load_config, read_env_file, SimpleClusterSource
from clusterlens.errors import ConfigError
from pathlib import Path

import json
import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CLUSTERLENS_BOOTSTRAP_SERVERS", "CLUSTERLENS_CLUSTERS", "CLUSTERLENS_SCHEMA_REGISTRY_URL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = Config()

    assert config.bootstrap_servers == []
    assert config.clusters is None
    assert config.cluster_source() == SimpleClusterSource(bootstrap_servers=())


def test_bootstrap_servers_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLUSTERLENS_BOOTSTRAP_SERVERS", "broker1:9092, broker2:9093")
    monkeypatch.setenv("CLUSTERLENS_SCHEMA_REGISTRY_URL", "http://sr:8081")

    assert Config().cluster_source() == SimpleClusterSource(
        bootstrap_servers=("broker1:9092", "broker2:9093"), schema_registry_url="http://sr:8081"
    )


def test_blank_schema_registry_url_is_ignored() -> None:
    config = load_config({"bootstrap_servers": ["broker1:9092"], "schema_registry_url": "  "})

    assert config.cluster_source() == SimpleClusterSource(bootstrap_servers=("broker1:9092",))


def test_clusters_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "CLUSTERLENS_CLUSTERS",
        json.dumps([{"name": "prod", "brokers": [{"host": "kafka1", "port": 9092}], "jmxUser": "monitor"}]),
    )

    source = Config().cluster_source()

    assert isinstance(source, AdvancedClusterSource)
    (cluster,) = source.clusters
    assert cluster.name == "prod"
    assert cluster.jmx_user == "monitor"


def test_advanced_source_takes_precedence() -> None:
    config = load_config({"bootstrap_servers": "broker1:9092", "clusters": []})

    assert config.cluster_source() == AdvancedClusterSource(clusters=())


def test_unknown_setting_is_config_error() -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config({"bootstrap_server": ["broker1:9092"]})


def test_read_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "clusterlens.env"
    env_file.write_text("CLUSTERLENS_BOOTSTRAP_SERVERS=broker1:9092\nCLUSTERLENS_LOG_LEVEL=WARNING\n")

    config = read_env_file(str(env_file))

    assert config.bootstrap_servers == ["broker1:9092"]
    assert config.log_level == "WARNING"
