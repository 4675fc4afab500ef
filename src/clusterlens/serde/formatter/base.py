"""
clusterlens - message formatter base

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from clusterlens.serde.message_format import MessageFormat
from clusterlens.typing import SchemaId
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DeserializationContext:
    # Payload with the schema registry header already stripped
    payload: bytes
    schema: str | None = None
    schema_id: SchemaId | None = None


@dataclass(frozen=True)
class DecodedValue:
    message_format: MessageFormat
    value: Any = None
    schema_id: SchemaId | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageFormatter(ABC):
    """Decodes the raw bytes of one wire format.

    Implementations hold no state and report malformed input through
    `DecodedValue.error` instead of raising.
    """

    @property
    @abstractmethod
    def message_format(self) -> MessageFormat:
        pass

    @abstractmethod
    def deserialize(self, context: DeserializationContext) -> DecodedValue:
        pass

    def decoded(self, context: DeserializationContext, value: Any) -> DecodedValue:
        return DecodedValue(message_format=self.message_format, value=value, schema_id=context.schema_id)

    def failed(self, context: DeserializationContext, error: str) -> DecodedValue:
        return DecodedValue(message_format=self.message_format, schema_id=context.schema_id, error=error)
