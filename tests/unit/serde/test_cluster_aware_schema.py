"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.cluster_registry import ClusterRegistry
from clusterlens.errors import UnknownCluster
from clusterlens.models import BrokerConfig, ClusterConfig, SchemaRegistryConfig
from clusterlens.serde.cluster_aware_schema import ClusterAwareSchema, ClusterAwareSchemas
from clusterlens.serde.formatter_registry import FormatterRegistry
from clusterlens.serde.message_format import MessageFormat
from clusterlens.typing import ClusterId, SchemaId
from unittest.mock import Mock

import pytest


@pytest.mark.parametrize("message_format", list(MessageFormat))
def test_resolve_formatter_returns_registered_formatter(
    formatter_registry: FormatterRegistry, message_format: MessageFormat
) -> None:
    facade = Mock()
    facade.classify.return_value = message_format
    schema = ClusterAwareSchema(schema_registry_facade=facade, formatters=formatter_registry)

    formatter = schema.resolve_formatter("payments", SchemaId(3), False)

    assert formatter is formatter_registry.get(message_format)


@pytest.mark.parametrize("is_key", [True, False])
def test_is_key_is_passed_to_the_facade(formatter_registry: FormatterRegistry, is_key: bool) -> None:
    facade = Mock()
    facade.classify.return_value = MessageFormat.AVRO
    schema = ClusterAwareSchema(schema_registry_facade=facade, formatters=formatter_registry)

    assert schema.get_schema_format("payments", SchemaId(3), is_key) is MessageFormat.AVRO
    facade.classify.assert_called_once_with("payments", SchemaId(3), is_key)


def test_missing_schema_id_is_delegated(formatter_registry: FormatterRegistry, static_facade) -> None:
    facade = static_facade()
    schema = ClusterAwareSchema(schema_registry_facade=facade, formatters=formatter_registry)

    formatter = schema.resolve_formatter("payments", None, True)

    assert formatter.message_format is MessageFormat.STRING
    assert facade.classify_calls == [("payments", None, True)]


class TestClusterAwareSchemas:
    @pytest.fixture(name="registry")
    def fixture_registry(self) -> ClusterRegistry:
        broker = BrokerConfig(host="kafka1", port=9092)
        return ClusterRegistry(
            {
                ClusterId("with_registry"): ClusterConfig(
                    name="with_registry", brokers=(broker,), schema_registry=SchemaRegistryConfig(url="http://sr:8081")
                ),
                ClusterId("plain"): ClusterConfig(name="plain", brokers=(broker,)),
            }
        )

    def test_facade_created_per_cluster_with_registry(
        self, registry: ClusterRegistry, formatter_registry: FormatterRegistry, static_facade
    ) -> None:
        facade = static_facade(formats={SchemaId(1): MessageFormat.PROTOBUF})
        factory = Mock(return_value=facade)

        schemas = ClusterAwareSchemas(registry, formatter_registry, factory)

        factory.assert_called_once_with("with_registry", SchemaRegistryConfig(url="http://sr:8081"))
        formatter = schemas.resolve_formatter(ClusterId("with_registry"), "orders", SchemaId(1), False)
        assert formatter.message_format is MessageFormat.PROTOBUF
        assert facade.classify_calls == [("orders", SchemaId(1), False)]

    def test_cluster_without_registry_uses_string_formatter(
        self, registry: ClusterRegistry, formatter_registry: FormatterRegistry
    ) -> None:
        schemas = ClusterAwareSchemas(registry, formatter_registry, Mock())

        assert schemas.get(ClusterId("plain")) is None
        formatter = schemas.resolve_formatter(ClusterId("plain"), "orders", SchemaId(1), True)
        assert formatter.message_format is MessageFormat.STRING

    def test_unknown_cluster(self, registry: ClusterRegistry, formatter_registry: FormatterRegistry) -> None:
        schemas = ClusterAwareSchemas(registry, formatter_registry, Mock())

        with pytest.raises(UnknownCluster):
            schemas.resolve_formatter(ClusterId("missing"), "orders", None, False)
