"""
clusterlens - record deserialization

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.constants import HEADER_FORMAT, HEADER_SIZE, START_BYTE
from clusterlens.errors import InvalidMessageHeader
from clusterlens.serde.cluster_aware_schema import ClusterAwareSchemas
from clusterlens.serde.formatter import DecodedValue, DeserializationContext
from clusterlens.serde.message_format import MessageFormat
from clusterlens.typing import ClusterId, SchemaId
from dataclasses import dataclass

import logging
import struct

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeserializedMessage:
    key: DecodedValue | None
    value: DecodedValue | None


def read_schema_id(data: bytes) -> tuple[SchemaId, bytes]:
    if len(data) < HEADER_SIZE:
        raise InvalidMessageHeader(f"Payload of {len(data)} bytes is shorter than the header")
    start_byte, schema_id = struct.unpack(HEADER_FORMAT, data[:HEADER_SIZE])
    if start_byte != START_BYTE:
        raise InvalidMessageHeader(f"Start byte is {start_byte:x} and should be {START_BYTE:x}")
    return SchemaId(schema_id), data[HEADER_SIZE:]


def split_header(data: bytes) -> tuple[SchemaId | None, bytes]:
    """Schema id from a registry framed payload, or None for plain payloads."""
    try:
        return read_schema_id(data)
    except InvalidMessageHeader:
        return None, data


class MessageDeserializer:
    def __init__(self, schemas: ClusterAwareSchemas) -> None:
        self.schemas = schemas

    def deserialize(
        self,
        cluster_id: ClusterId,
        topic: str,
        key: bytes | None,
        value: bytes | None,
    ) -> DeserializedMessage:
        return DeserializedMessage(
            key=self._decode(cluster_id, topic, key, is_key=True),
            value=self._decode(cluster_id, topic, value, is_key=False),
        )

    def _decode(self, cluster_id: ClusterId, topic: str, data: bytes | None, *, is_key: bool) -> DecodedValue | None:
        if data is None:
            return None
        schema_id, payload = split_header(data)
        cluster_aware_schema = self.schemas.get(cluster_id)
        if cluster_aware_schema is None:
            # no registry to interpret the header with, keep the bytes as they are
            formatter = self.schemas.resolve_formatter(cluster_id, topic, None, is_key)
            return formatter.deserialize(DeserializationContext(payload=data))

        formatter = cluster_aware_schema.resolve_formatter(topic, schema_id, is_key)
        if formatter.message_format is MessageFormat.STRING:
            return formatter.deserialize(DeserializationContext(payload=data, schema_id=schema_id))
        schema = None
        if schema_id is not None:
            schema = cluster_aware_schema.schema_registry_facade.get_schema(schema_id)
            if schema is None:
                LOG.warning("Schema %s of topic %s not found in the schema registry", schema_id, topic)
        decoded = formatter.deserialize(DeserializationContext(payload=payload, schema=schema, schema_id=schema_id))
        if not decoded.ok:
            LOG.debug("Could not decode %s of topic %s: %s", "key" if is_key else "value", topic, decoded.error)
        return decoded
