"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.serde.formatter.base import DecodedValue, DeserializationContext, MessageFormatter
from clusterlens.serde.message_format import MessageFormat
from functools import lru_cache
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing import Registry
from referencing.exceptions import Unresolvable

import json

# References are never fetched, a schema that points outside itself cannot be resolved
_NO_REMOTE_REFERENCES: Registry = Registry()


@lru_cache(maxsize=256)
def json_schema_validator(schema_str: str) -> Draft7Validator:
    schema = json.loads(schema_str)
    if not isinstance(schema, (dict, bool)):
        raise SchemaError(f"JSON schema must be an object or a boolean, not {type(schema).__name__}")
    validator_cls = validator_for(schema, default=Draft7Validator)
    validator_cls.check_schema(schema)
    return validator_cls(schema, registry=_NO_REMOTE_REFERENCES)


class JsonSchemaMessageFormatter(MessageFormatter):
    """Decodes JSON payloads, validating them when the schema is known."""

    @property
    def message_format(self) -> MessageFormat:
        return MessageFormat.JSON

    def deserialize(self, context: DeserializationContext) -> DecodedValue:
        try:
            value = json.loads(context.payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return self.failed(context, f"Data does not contain a valid JSON document: {e}")
        if context.schema is None:
            return self.decoded(context, value)
        try:
            validator = json_schema_validator(context.schema)
        except (json.JSONDecodeError, SchemaError) as e:
            return self.failed(context, f"Invalid JSON schema: {e}")
        try:
            validator.validate(value)
        except ValidationError as e:
            return self.failed(context, f"Object does not fit to stored schema: {e.message}")
        except Unresolvable as e:
            return self.failed(context, f"Invalid JSON schema: unresolvable reference {e}")
        return self.decoded(context, value)
