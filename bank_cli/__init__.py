# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
bank - mkdir and touch in one command, with file/directory type detection.
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("bank")
except (ImportError, PackageNotFoundError):
    __version__ = "0.2.0"
