"""
clusterlens - formatter registry

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.errors import FormatterMissing
from clusterlens.serde.formatter import (
    AvroMessageFormatter,
    JsonSchemaMessageFormatter,
    MessageFormatter,
    ProtobufMessageFormatter,
    StringMessageFormatter,
)
from clusterlens.serde.message_format import MessageFormat
from collections.abc import Mapping
from types import MappingProxyType

import logging

LOG = logging.getLogger(__name__)


class FormatterRegistry:
    """Fixed mapping of every message format to its formatter.

    Construction fails when any format has no formatter so that a gap shows up
    at startup and never while decoding a message.
    """

    def __init__(self, formatters: Mapping[MessageFormat, MessageFormatter]) -> None:
        missing = [message_format for message_format in MessageFormat if message_format not in formatters]
        if missing:
            raise FormatterMissing(missing)
        self._formatters: Mapping[MessageFormat, MessageFormatter] = MappingProxyType(dict(formatters))

    def get(self, message_format: MessageFormat) -> MessageFormatter:
        try:
            return self._formatters[message_format]
        except KeyError:
            raise FormatterMissing([message_format]) from None

    def formats(self) -> list[MessageFormat]:
        return list(self._formatters)


def default_formatter_registry() -> FormatterRegistry:
    formatters: list[MessageFormatter] = [
        StringMessageFormatter(),
        AvroMessageFormatter(),
        JsonSchemaMessageFormatter(),
        ProtobufMessageFormatter(),
    ]
    registry = FormatterRegistry({formatter.message_format: formatter for formatter in formatters})
    LOG.debug("Registered formatters for %s", registry.formats())
    return registry
