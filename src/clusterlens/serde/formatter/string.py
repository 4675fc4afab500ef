"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from clusterlens.serde.formatter.base import DecodedValue, DeserializationContext, MessageFormatter
from clusterlens.serde.message_format import MessageFormat


class StringMessageFormatter(MessageFormatter):
    @property
    def message_format(self) -> MessageFormat:
        return MessageFormat.STRING

    def deserialize(self, context: DeserializationContext) -> DecodedValue:
        return self.decoded(context, context.payload.decode("utf-8", errors="replace"))
