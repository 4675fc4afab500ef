"""
clusterlens - version

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
__version__ = "0.1.0"
