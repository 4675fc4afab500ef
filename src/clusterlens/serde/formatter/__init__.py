"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from clusterlens.serde.formatter.avro import AvroMessageFormatter
from clusterlens.serde.formatter.base import DecodedValue, DeserializationContext, MessageFormatter
from clusterlens.serde.formatter.json_schema import JsonSchemaMessageFormatter
from clusterlens.serde.formatter.protobuf import ProtobufMessageFormatter
from clusterlens.serde.formatter.string import StringMessageFormatter

__all__ = [
    "AvroMessageFormatter",
    "DecodedValue",
    "DeserializationContext",
    "JsonSchemaMessageFormatter",
    "MessageFormatter",
    "ProtobufMessageFormatter",
    "StringMessageFormatter",
]
