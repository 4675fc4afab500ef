"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from avro.errors import AvroException
from avro.io import BinaryDecoder, DatumReader
from clusterlens.serde.formatter.base import DecodedValue, DeserializationContext, MessageFormatter
from clusterlens.serde.message_format import MessageFormat
from functools import lru_cache

import avro.schema
import io
import json
import struct


@lru_cache(maxsize=256)
def parse_avro_schema(schema_str: str) -> avro.schema.Schema:
    return avro.schema.parse(schema_str)


class AvroMessageFormatter(MessageFormatter):
    @property
    def message_format(self) -> MessageFormat:
        return MessageFormat.AVRO

    def deserialize(self, context: DeserializationContext) -> DecodedValue:
        if context.schema is None:
            return self.failed(context, "Avro payload without writer schema")
        try:
            writer_schema = parse_avro_schema(context.schema)
        except (AvroException, json.JSONDecodeError) as e:
            return self.failed(context, f"Invalid Avro schema: {e}")
        reader = DatumReader(writers_schema=writer_schema)
        with io.BytesIO(context.payload) as bio:
            try:
                value = reader.read(BinaryDecoder(bio))
            except (AvroException, EOFError, struct.error, TypeError, UnicodeDecodeError, ValueError) as e:
                return self.failed(context, f"Data cannot be decoded with provided schema: {e}")
        return self.decoded(context, value)
