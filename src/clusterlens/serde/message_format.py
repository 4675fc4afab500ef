"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from clusterlens.typing import StrEnum
from enum import unique


@unique
class MessageFormat(StrEnum):
    STRING = "STRING"
    AVRO = "AVRO"
    JSON = "JSON"
    PROTOBUF = "PROTOBUF"
