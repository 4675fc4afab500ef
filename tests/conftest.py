"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.container import ClusterLensContainer
from clusterlens.host_identity import HostIdentity
from clusterlens.serde.formatter_registry import default_formatter_registry, FormatterRegistry
from clusterlens.serde.message_format import MessageFormat
from clusterlens.typing import SchemaId
from collections.abc import Iterator
from pathlib import Path

import pytest


class StaticSchemaRegistryFacade:
    """Schema registry facade answering from in-memory tables."""

    def __init__(
        self,
        formats: dict[SchemaId, MessageFormat] | None = None,
        schemas: dict[SchemaId, str] | None = None,
    ) -> None:
        self.formats = formats or {}
        self.schemas = schemas or {}
        self.classify_calls: list[tuple[str, SchemaId | None, bool]] = []

    def classify(self, topic: str, schema_id: SchemaId | None, is_key: bool) -> MessageFormat:
        self.classify_calls.append((topic, schema_id, is_key))
        if schema_id is None:
            return MessageFormat.STRING
        return self.formats[schema_id]

    def get_schema(self, schema_id: SchemaId) -> str | None:
        return self.schemas.get(schema_id)


@pytest.fixture(name="clusterlens_container")
def fixture_clusterlens_container(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> ClusterLensContainer:
    for name in ("CLUSTERLENS_BOOTSTRAP_SERVERS", "CLUSTERLENS_CLUSTERS", "CLUSTERLENS_SCHEMA_REGISTRY_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CLUSTERLENS_INSTALLATION_ID_FILE", str(tmp_path / "installation_id.txt"))
    return ClusterLensContainer()


@pytest.fixture(name="formatter_registry")
def fixture_formatter_registry() -> FormatterRegistry:
    return default_formatter_registry()


@pytest.fixture(name="host_identity")
def fixture_host_identity() -> Iterator[HostIdentity]:
    host_identity = HostIdentity(workers=2)
    yield host_identity
    host_identity.close()


@pytest.fixture(name="installation_id_file")
def fixture_installation_id_file(tmp_path: Path) -> Path:
    return tmp_path / "clusterlens_installation_id.txt"


@pytest.fixture(name="static_facade")
def fixture_static_facade() -> type[StaticSchemaRegistryFacade]:
    return StaticSchemaRegistryFacade
