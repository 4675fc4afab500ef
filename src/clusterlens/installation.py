"""
clusterlens - installation id

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from clusterlens.errors import ConfigError
from clusterlens.typing import InstallationId
from pathlib import Path

import logging
import uuid

LOG = logging.getLogger(__name__)


def resolve_installation_id(path: Path) -> InstallationId:
    """Return the persisted installation id, creating it on first start.

    A missing or blank file is treated as a fresh installation.
    """
    try:
        if path.exists():
            installation_id = path.read_text(encoding="utf-8").strip()
            if installation_id:
                return InstallationId(installation_id)
            LOG.warning("Installation id file %s is empty, generating a new installation id", path)
        installation_id = str(uuid.uuid4())
        path.write_text(installation_id, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read installation id file {path}") from e
    LOG.info("Generated new installation id %s into %s", installation_id, path)
    return InstallationId(installation_id)
