"""
clusterlens - constants

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from typing import Final

DEFAULT_INSTALLATION_ID_FILE: Final = "clusterlens_installation_id.txt"
# Name of the root log handler and the journal syslog identifier
LOG_HANDLER_NAME: Final = "clusterlens"
HOST_PORT_SEPARATOR: Final = ":"
# Every character outside of this class is replaced when deriving a cluster id
CLUSTER_ID_SPECIAL_CHARS: Final = r"[^a-zA-Z0-9\s]"
CLUSTER_ID_REPLACEMENT: Final = "_"

DEFAULT_HOST_RESOLUTION_WORKERS: Final = 10
DEFAULT_HOST_RESOLUTION_CACHE_TTL: Final = 30.0
DEFAULT_HOST_RESOLUTION_CACHE_SIZE: Final = 1024
HOST_RESOLUTION_TIMEOUT: Final = 10.0

# Schema registry framed payloads: magic byte followed by a 4 byte schema id
START_BYTE: Final = 0x0
HEADER_FORMAT: Final = ">bI"
HEADER_SIZE: Final = 5
