"""
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.config import Config
from clusterlens.constants import LOG_HANDLER_NAME
from typing import Any

import logging
import sys

# Key fragments marking a configuration value as a credential
SECRET_KEYS = ("password", "secret", "jaas", "keyfile")


def _root_handler(config: Config) -> logging.Handler:
    match config.log_handler:
        case "systemd":
            from systemd import journal

            return journal.JournalHandler(SYSLOG_IDENTIFIER=LOG_HANDLER_NAME)
        case _:
            return logging.StreamHandler(stream=sys.stdout)


def configure_logging(*, config: Config) -> None:
    """Install the clusterlens root handler, replacing the one of an earlier call."""
    handler = _root_handler(config)
    handler.setFormatter(logging.Formatter(config.log_format))
    handler.setLevel(config.log_level)
    handler.set_name(LOG_HANDLER_NAME)

    for existing in list(logging.root.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(config.log_level)


def _is_secret(key: Any) -> bool:
    return any(secret in str(key).lower() for secret in SECRET_KEYS)


def mask_secrets(value: Any) -> Any:
    if isinstance(value, dict):
        masked = {}
        for key, item in value.items():
            if _is_secret(key) and item is not None:
                item = "****"
            masked[key] = mask_secrets(item)
        return masked
    if isinstance(value, (list, tuple)):
        return [mask_secrets(item) for item in value]
    return value


def log_config_without_secrets(config: Config) -> None:
    logging.log(logging.DEBUG, "Config %r", mask_secrets(config.model_dump()))
