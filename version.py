"""
clusterlens - version

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from __future__ import annotations

from typing import Final

import os
import pathlib
import re

version_file: Final = pathlib.Path(__file__).parent.resolve() / "src/clusterlens/version.py"


def save_version(new_ver: str | None, old_ver: str | None) -> bool:
    if not new_ver:
        return False
    if not old_ver or new_ver != old_ver:
        version_file.write_text(f'"""\nclusterlens - version\n\nCopyright (c) 2024 Aiven Ltd\nSee LICENSE for details\n"""\n__version__ = "{new_ver}"\n')
    return True


def from_version_file() -> str | None:
    try:
        match = re.search(r'^__version__ = "([^"]+)"$', version_file.read_text(), re.MULTILINE)
    except OSError:
        return None
    return match.group(1) if match else None


def get_project_version() -> str:
    file_ver = from_version_file()

    if save_version(os.getenv("CLUSTERLENS_VERSION"), file_ver):
        return os.environ["CLUSTERLENS_VERSION"]

    if not file_ver:
        raise RuntimeError(f"version not available from environment or from file {str(version_file)!r}")

    return file_ver


if __name__ == "__main__":
    print(get_project_version())
