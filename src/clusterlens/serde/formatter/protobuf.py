"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.serde.formatter.base import DecodedValue, DeserializationContext, MessageFormatter
from clusterlens.serde.message_format import MessageFormat
from google.protobuf import empty_pb2
from google.protobuf.message import DecodeError
from google.protobuf.unknown_fields import UnknownFieldSet
from io import BytesIO
from typing import Any

WIRETYPE_LENGTH_DELIMITED = 2
WIRETYPE_START_GROUP = 3


def read_varint(bio: BytesIO) -> int:
    """Read a zig-zag encoded variable-length integer."""
    varint = 0
    read_bytes = 0

    while True:
        char = bio.read(1)
        if len(char) == 0:
            raise EOFError(f"EOF while reading varint, value is {varint} so far")

        byte = ord(char)
        varint += (byte & 0x7F) << (7 * read_bytes)

        read_bytes += 1

        if not byte & 0x80:
            return (varint >> 1) ^ -(varint & 1)


def read_indexes(bio: BytesIO) -> list[int]:
    """Message indexes locating the record type inside the .proto file.

    A single zero byte is the shortcut for the first message type.
    """
    size = read_varint(bio)
    if size == 0:
        return [0]
    if size < 0:
        raise ValueError(f"Invalid message index count {size}")
    return [read_varint(bio) for _ in range(size)]


def _field_value(wire_type: int, data: Any) -> Any:
    if wire_type == WIRETYPE_START_GROUP:
        return _fields_to_dict(data)
    if wire_type == WIRETYPE_LENGTH_DELIMITED:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return data.hex()
    return data


def _fields_to_dict(fields: UnknownFieldSet) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for field in fields:
        key = str(field.field_number)
        value = _field_value(field.wire_type, field.data)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


class ProtobufMessageFormatter(MessageFormatter):
    """Schema-less rendering of Protobuf records keyed by field number."""

    @property
    def message_format(self) -> MessageFormat:
        return MessageFormat.PROTOBUF

    def deserialize(self, context: DeserializationContext) -> DecodedValue:
        with BytesIO(context.payload) as bio:
            try:
                indexes = read_indexes(bio)
            except (EOFError, ValueError) as e:
                return self.failed(context, f"Invalid message indexes: {e}")
            body = bio.read()

        message = empty_pb2.Empty()
        try:
            message.ParseFromString(body)
        except DecodeError as e:
            return self.failed(context, f"Data does not contain a valid message: {e}")
        return self.decoded(context, {"message_indexes": indexes, "fields": _fields_to_dict(UnknownFieldSet(message))})
