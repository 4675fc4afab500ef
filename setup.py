"""
clusterlens - setup
Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""

from setuptools import find_packages, setup
from version import get_project_version

setup(
    name="clusterlens",
    version=get_project_version(),
    description="Cluster configuration registry and schema aware record decoding for Kafka",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "avro>=1.11",
        "cachetools>=5.3",
        "dependency-injector>=4.41",
        "jsonschema>=4.18",
        "protobuf>=4.24",
        "pydantic>=2.7",
        "pydantic-settings>=2.7",
        "referencing>=0.28",
    ],
    extras_require={
        "systemd-logging": ["systemd-python"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "clusterlens = clusterlens.__main__:main",
        ],
    },
)
